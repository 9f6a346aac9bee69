"""
Request gating as composable guards.

A guard takes a GateContext and returns Admitted (possibly with claims
added) or Rejected. Guards run in order and the first rejection wins:

    outcome = run_guards([bearer_guard(tokens), role_guard("admin")], ctx)

Nothing here touches Flask; decorators.py adapts guards to views.
"""
import logging
from dataclasses import dataclass, replace
from typing import Callable, Iterable, Optional, Union

from .tokens import TokenError, TokenService, get_bearer_token
from .types import Claims

logger = logging.getLogger(__name__)

MISSING_CREDENTIAL = "missing or malformed credential"


@dataclass(frozen=True)
class GateContext:
    """What a guard can see about a request."""
    authorization: Optional[str]
    path: str = ""
    claims: Optional[Claims] = None


@dataclass(frozen=True)
class Admitted:
    context: GateContext


@dataclass(frozen=True)
class Rejected:
    status_code: int
    message: str


Outcome = Union[Admitted, Rejected]
Guard = Callable[[GateContext], Outcome]


def bearer_guard(tokens: TokenService) -> Guard:
    """Admit requests carrying a valid bearer token; attach its claims."""

    def guard(ctx: GateContext) -> Outcome:
        token = get_bearer_token(ctx.authorization)
        if token is None:
            return Rejected(401, MISSING_CREDENTIAL)
        try:
            claims = tokens.validate(token)
        except TokenError as e:
            return Rejected(401, str(e))
        return Admitted(replace(ctx, claims=claims))

    return guard


def role_guard(*allowed_roles: str) -> Guard:
    """Admit only already-authenticated requests whose role is allowed."""
    allowed = frozenset(allowed_roles)

    def guard(ctx: GateContext) -> Outcome:
        if ctx.claims is None:
            return Rejected(401, MISSING_CREDENTIAL)
        if ctx.claims.role not in allowed:
            return Rejected(403, f"Access denied. Required roles: {', '.join(sorted(allowed))}")
        return Admitted(ctx)

    return guard


def run_guards(guards: Iterable[Guard], ctx: GateContext) -> Outcome:
    """Run guards in order, threading the context through."""
    for guard in guards:
        outcome = guard(ctx)
        if isinstance(outcome, Rejected):
            logger.warning(
                f"Request rejected: {outcome.message}",
                extra={'endpoint': ctx.path, 'status_code': outcome.status_code},
            )
            return outcome
        ctx = outcome.context
    return Admitted(ctx)
