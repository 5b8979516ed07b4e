"""
Account store: balance, role and ban state of accounts, backed by the users table.
"""
import uuid
from typing import Optional

from tortoise.expressions import F
from tortoise.transactions import in_transaction

from app.core.errors import CreditConflictError, InvalidInputError, NotFoundError
from app.models.user import User

ROLES = ("user", "admin")


def parse_uuid(raw) -> Optional[uuid.UUID]:
    """UUID from a path/body value, or None when it is not one."""
    if isinstance(raw, uuid.UUID):
        return raw
    try:
        return uuid.UUID(str(raw))
    except (TypeError, ValueError):
        return None


class AccountStore:

    async def get(self, account_id) -> User:
        """Fetch an account; raises NotFoundError when absent."""
        key = parse_uuid(account_id)
        user = await User.get_or_none(id=key) if key else None
        if not user:
            raise NotFoundError("Account not found")
        return user

    async def conditional_decrement_credits(
        self, account_id, amount: int, expected_min_balance: Optional[int] = None
    ) -> int:
        """
        Take ``amount`` credits if the account can still pay for them.

        Runs as one conditional UPDATE on the live row (unbanned and holding at
        least ``expected_min_balance``, which defaults to ``amount``), so
        concurrent requests each spend a distinct credit and the balance never
        goes negative. The new balance is read back inside the same transaction.

        Returns:
            The balance after the decrement

        Raises:
            CreditConflictError: the row no longer qualifies (banned or drained since it was read)
        """
        floor = amount if expected_min_balance is None else max(amount, expected_min_balance)
        async with in_transaction() as conn:
            updated = await User.filter(
                id=account_id,
                credits__gte=floor,
                is_banned=False,
            ).using_db(conn).update(credits=F("credits") - amount)
            if not updated:
                raise CreditConflictError()
            balances = await User.filter(id=account_id).using_db(conn).values_list("credits", flat=True)
        return balances[0]

    async def admin_update(
        self,
        account_id,
        credits: Optional[int] = None,
        role: Optional[str] = None,
        is_banned: Optional[bool] = None,
    ) -> User:
        """Apply an administrator's edits; only the given fields change."""
        if credits is not None and credits < 0:
            raise InvalidInputError("credits must be >= 0")
        if role is not None and role not in ROLES:
            raise InvalidInputError(f"role must be one of {', '.join(ROLES)}")

        user = await self.get(account_id)
        changed = []
        if credits is not None:
            user.credits = credits
            changed.append("credits")
        if role is not None:
            user.role = role
            changed.append("role")
        if is_banned is not None:
            user.is_banned = is_banned
            changed.append("is_banned")
        if changed:
            await user.save(update_fields=changed + ["updated_at"])
        return user
