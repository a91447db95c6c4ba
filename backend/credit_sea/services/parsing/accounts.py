"""
Credit Sea - Account List Normalizer

CAIS_Account_DETAILS arrives as nothing, one bare element, or a run of
siblings depending on how many tradelines the applicant has. This module
collapses all three shapes into one ordered tuple of CreditAccount.
"""
from __future__ import annotations
from typing import Tuple

from ...models.ssot import CreditAccount
from .coercion import to_decimal, to_trimmed_string
from .extractor import text_at
from .xml_tree import Absent, Lookup, Many, One, RawNode


def account_from_node(node: RawNode) -> CreditAccount:
    """Build one CreditAccount from a CAIS_Account_DETAILS element."""
    return CreditAccount(
        type=to_trimmed_string(text_at(node, ["Account_Type"])),
        bank=to_trimmed_string(text_at(node, ["Subscriber_Name"])),
        account_number=to_trimmed_string(text_at(node, ["Account_Number"])),
        address="",
        amount_overdue=to_decimal(text_at(node, ["Amount_Past_Due"])),
        current_balance=to_decimal(text_at(node, ["Current_Balance"])),
    )


def normalize_accounts(accounts: Lookup) -> Tuple[CreditAccount, ...]:
    """
    Resolve the account details lookup into a tuple in document order.

    Absent -> ()
    One    -> (account,)
    Many   -> one account per sibling, order preserved, no deduplication
    """
    if isinstance(accounts, Absent):
        return ()
    if isinstance(accounts, One):
        return (account_from_node(accounts.node),)
    if isinstance(accounts, Many):
        return tuple(account_from_node(n) for n in accounts.nodes)
    raise TypeError(f"Unexpected lookup variant: {type(accounts).__name__}")
