from fastapi import APIRouter
from fastapi.responses import StreamingResponse
from dishka.integrations.fastapi import inject
from dishka import FromComponent
from typing import Annotated
from erc20.schemas import (
    GetBalanceRequest,
    BalanceResponse,
    GetTransfersRequest,
    TransfersResponse
)
from erc20.usecases import GetTokenBalanceUseCase, ScanTransfersUseCase

router = APIRouter(
    prefix="/api/token",
    tags=["Token"]
)


@router.post("/balance", response_model=BalanceResponse)
@inject
async def get_token_balance(
    request: GetBalanceRequest,
    use_case: Annotated[
        GetTokenBalanceUseCase, FromComponent("erc20")
    ]
) -> BalanceResponse:
    """
    Get a wallet's balance of an ERC-20 token.

    Parameters
    ----------
    request : GetBalanceRequest
        Request with contract and wallet addresses
    use_case : GetTokenBalanceUseCase
        Use case for getting token balance

    Returns
    -------
    BalanceResponse
        Token balance information
    """
    return await use_case(
        contract_address=request.contract_address,
        wallet_address=request.wallet_address
    )


@router.post("/transfers", response_model=TransfersResponse)
@inject
async def get_transfers(
    request: GetTransfersRequest,
    use_case: Annotated[
        ScanTransfersUseCase, FromComponent("erc20")
    ]
) -> TransfersResponse:
    """
    Get Transfer events of a token within a block range.

    Parameters
    ----------
    request : GetTransfersRequest
        Request with contract address and block range
    use_case : ScanTransfersUseCase
        Use case for scanning transfers

    Returns
    -------
    TransfersResponse
        Decoded transfers
    """
    return await use_case(
        contract_address=request.contract_address,
        from_block=request.from_block,
        to_block=request.to_block,
        window_size=request.window_size,
        abi=request.abi
    )


@router.post("/transfers/csv")
@inject
async def stream_transfers(
    request: GetTransfersRequest,
    use_case: Annotated[
        ScanTransfersUseCase, FromComponent("erc20")
    ]
) -> StreamingResponse:
    """
    Stream Transfer events as ``BlockNumber,BlockHash,From,To,Value`` lines.

    Parameters
    ----------
    request : GetTransfersRequest
        Request with contract address and block range
    use_case : ScanTransfersUseCase
        Use case for scanning transfers

    Returns
    -------
    StreamingResponse
        CSV lines, produced window by window; a failure after the first
        line ends the stream with an ``error,<from_block>,<to_block>,...`` line
    """
    lines = await use_case.stream_lines(
        contract_address=request.contract_address,
        from_block=request.from_block,
        to_block=request.to_block,
        window_size=request.window_size,
        abi=request.abi
    )
    return StreamingResponse(lines, media_type="text/csv")
