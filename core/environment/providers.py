from dishka import Provider, Scope, provide
from core.environment.config import Settings


class EnvironmentProvider(Provider):
    """
    Provider for environment configuration (RPC endpoint, scan limits,
    token overrides, logging).
    """

    component = "environment"
    scope = Scope.APP

    @provide
    def get_settings(self) -> Settings:
        """
        Provide application settings read from the environment.

        Returns
        -------
        Settings
            Application settings instance
        """
        return Settings()
