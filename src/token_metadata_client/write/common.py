from __future__ import annotations

from solders.keypair import Keypair
from solders.pubkey import Pubkey

from .. import constants as const
from ..accounts import Metadata


def authorization_rules_accounts(metadata: Metadata) -> tuple[Pubkey | None, Pubkey | None]:
    """(authorization rules program, rule set) when `metadata` names a rule set."""
    rule_set = metadata.rule_set
    if rule_set is None:
        return None, None
    return const.AUTH_RULES_PROGRAM_ID, rule_set


def signers_of(authority: Keypair, payer: Keypair | None) -> list[Keypair]:
    """Fee payer first; `payer` defaults to `authority`."""
    return [payer or authority, authority]
