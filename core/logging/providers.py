import logging
import sys
from typing import Annotated
from dishka import Provider, provide, Scope, FromComponent
from core.environment.config import Settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class LoggerProvider(Provider):
    """
    Provider for logging configuration and logger instances.

    Configures logging to output to console (stdout) and, when
    ``log_file`` is set, to a file as well.
    """
    component = "logger"
    @provide(scope=Scope.APP)
    def get_logger(
        self,
        settings: Annotated[Settings, FromComponent("environment")]
    ) -> logging.Logger:
        """
        Provide configured logger instance.

        Parameters
        ----------
        settings : Settings
            Application settings

        Returns
        -------
        logging.Logger
            Configured logger that writes to console
        """
        if not logging.getLogger().handlers:
            handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
            if settings.log_file:
                handlers.append(logging.FileHandler(settings.log_file, encoding="utf-8"))
            logging.basicConfig(
                level=settings.log_level.upper(),
                format=LOG_FORMAT,
                handlers=handlers
            )

        return logging.getLogger("erc20_service")
