"""Compliance policy document supplied to the model alongside page text."""
from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

COMPLIANCE_GUIDELINES = """\
1. Banking terminology. Only chartered banks may describe their products
   using the terms "bank", "bank account", "banking", "deposit" or
   "savings account". Non-bank financial technology companies must use
   neutral terms such as "financial account" or "money account" and must
   state which partner bank holds customer funds.
2. Deposit insurance. Any reference to FDIC insurance or "insured" funds
   must name the insuring partner bank, state the coverage limit, and
   explain that insurance only applies if the partner bank fails.
3. Interest and yield claims. Rates described as "APY", "interest" or
   "guaranteed returns" must include the effective date, state that the
   rate is variable where applicable, and disclose any fees or minimum
   balances that reduce the yield.
4. Credit products. Statements such as "no credit check", "guaranteed
   approval" or "instant approval" are prohibited unless accompanied by the
   eligibility criteria that apply.
5. Fees. Claims of "free", "no fees" or "no hidden fees" must be qualified
   where any fee can apply, with a link or reference to the fee schedule.
6. Card programs. Debit and credit cards must state the issuing bank and
   the card network license under which they are issued.
"""


def load_policy_document() -> str:
    """Return the policy text, preferring ``COMPLIANCE_POLICY_PATH`` when set."""

    override = os.getenv("COMPLIANCE_POLICY_PATH")
    if not override:
        return COMPLIANCE_GUIDELINES
    path = Path(override)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RuntimeError(f"Cannot read compliance policy from {path}: {exc}") from exc
    logger.debug("Loaded compliance policy from %s (%d chars)", path, len(text))
    return text
