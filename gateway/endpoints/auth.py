"""Authentication operation for the administrator login."""

from enrollment.credential.schemas import LoginResponse
from gateway.deps import Context
from gateway.routing import Router

router = Router()


@router.operation("login")
async def login(ctx: Context, username: str, password: str) -> LoginResponse:
    """
    Check a username and password.

    An unknown username and a wrong password fail with the same
    "Invalid credentials" message.
    """
    identity = await ctx.credentials.authenticate(username, password)
    return LoginResponse(success=True, identity=identity)
