"""
Authorization gate.

Each rule is a small named policy registered under (role, entity, operation).
``authorize`` is a pure lookup-and-evaluate: it never touches the database,
so callers load the caller's company profile and the target record first and
pass them in an ``AccessContext``. An unregistered key is a deny.
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from jobportal.core.auth_dependency import Caller
from jobportal.core.errors import AuthenticationError, AuthorizationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: Optional[str] = None

    @classmethod
    def allow(cls) -> "Decision":
        return cls(True)

    @classmethod
    def deny(cls, reason: str) -> "Decision":
        return cls(False, reason)


@dataclass
class AccessContext:
    """What a policy may look at besides the caller."""
    company: Any = None  # caller's own Company profile, if any
    target: Any = None   # the record being read or written


Policy = Callable[[Caller, AccessContext], Decision]

POLICIES: Dict[Tuple[str, str, str], Policy] = {}


def policy(role: str, entity: str, *operations: str):
    """Register the decorated function for every listed operation."""
    def register(fn: Policy) -> Policy:
        for operation in operations:
            POLICIES[(role, entity, operation)] = fn
        return fn
    return register


def _always_allow(caller: Caller, ctx: AccessContext) -> Decision:
    return Decision.allow()


def _approved_company(ctx: AccessContext, action: str) -> Optional[Decision]:
    if ctx.company is None or ctx.company.status != "approved":
        return Decision.deny(f"You need an approved company profile to {action}")
    return None


# -- Applications ---------------------------------------------------------

@policy("jobseeker", "application", "read", "update")
def applicant_owns_application(caller: Caller, ctx: AccessContext) -> Decision:
    if ctx.target is None or ctx.target.user_id != caller.id:
        return Decision.deny("You can only access your own applications")
    return Decision.allow()


@policy("company", "application", "read", "update")
def company_owns_application_job(caller: Caller, ctx: AccessContext) -> Decision:
    denied = _approved_company(ctx, "manage applications")
    if denied:
        return denied
    job = getattr(ctx.target, "job", None)
    if job is None or job.company_id != ctx.company.id:
        return Decision.deny("You can only access applications for your company's jobs")
    return Decision.allow()


@policy("company", "application", "list")
def company_lists_applications(caller: Caller, ctx: AccessContext) -> Decision:
    return _approved_company(ctx, "view applications") or Decision.allow()


policy("jobseeker", "application", "create")(_always_allow)
policy("admin", "application", "read", "update", "list")(_always_allow)


# -- Jobs -----------------------------------------------------------------

@policy("company", "job", "create")
def company_posts_job(caller: Caller, ctx: AccessContext) -> Decision:
    return _approved_company(ctx, "post jobs") or Decision.allow()


@policy("company", "job", "update", "delete")
def company_owns_job(caller: Caller, ctx: AccessContext) -> Decision:
    denied = _approved_company(ctx, "manage jobs")
    if denied:
        return denied
    if ctx.target is None or ctx.target.company_id != ctx.company.id:
        return Decision.deny("You can only manage jobs posted by your company")
    return Decision.allow()


policy("admin", "job", "update", "delete", "moderate")(_always_allow)


# -- Users ----------------------------------------------------------------

@policy("admin", "user", "update", "delete")
def admin_manages_non_admin(caller: Caller, ctx: AccessContext) -> Decision:
    if ctx.target is not None and ctx.target.role == "admin":
        return Decision.deny("Admin accounts cannot be modified")
    return Decision.allow()


policy("admin", "user", "list", "read")(_always_allow)


# -- Companies ------------------------------------------------------------

policy("admin", "company", "moderate", "list", "read")(_always_allow)
policy("company", "company", "create")(_always_allow)


@policy("company", "company", "read")
@policy("jobseeker", "company", "read")
def company_profile_visible(caller: Caller, ctx: AccessContext) -> Decision:
    # Approved profiles are public; others only to their owner
    if ctx.target is not None and (ctx.target.status == "approved" or ctx.target.user_id == caller.id):
        return Decision.allow()
    return Decision.deny("You do not have permission to view this company")


def authorize(
    caller: Optional[Caller],
    entity: str,
    operation: str,
    context: Optional[AccessContext] = None,
) -> Decision:
    """Decide whether ``caller`` may perform ``operation`` on ``entity``."""
    if caller is None:
        return Decision.deny("Authentication required")
    rule = POLICIES.get((caller.role, entity, operation))
    if rule is None:
        return Decision.deny(f"You do not have permission to {operation} this {entity}")
    return rule(caller, context or AccessContext())


def enforce(
    caller: Optional[Caller],
    entity: str,
    operation: str,
    context: Optional[AccessContext] = None,
) -> None:
    """Like ``authorize`` but raises the matching error on deny."""
    decision = authorize(caller, entity, operation, context)
    if decision.allowed:
        return
    if caller is None:
        raise AuthenticationError(decision.reason)
    logger.warning(
        f"Access denied: user_id={caller.id}, role={caller.role}, "
        f"entity={entity}, operation={operation}, reason={decision.reason}"
    )
    raise AuthorizationError(decision.reason)
