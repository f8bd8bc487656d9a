# -*- coding: utf-8 -*-
"""
Payment Text Module

Builds the payment string encoded into the QR code (Russian unified payment
format, ``ST00012`` header with ``|``-separated ``Key=Value`` fields) and the
payment instruction lines printed under the code.

Functions:
    build_payment_text: Payment string for a registered organization
    payment_instruction_lines: Human-readable payment details
    to_kopecks: Convert an amount in roubles to an integer number of kopecks
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Dict, List, Optional, Tuple, Union

PAYMENT_HEADER = "ST00012"


@dataclass(frozen=True)
class Organization:
    """Payee details for one organization."""

    key: str
    name: str
    display_name: str
    personal_acc: str
    bank_name: str
    bic: str
    corresp_acc: str
    payee_inn: str
    kpp: str
    ogrn: Optional[str] = None
    child_fio: bool = False

    def fields(self) -> List[Tuple[str, str]]:
        return [
            ("Name", self.name),
            ("PersonalAcc", self.personal_acc),
            ("BankName", self.bank_name),
            ("BIC", self.bic),
            ("CorrespAcc", self.corresp_acc),
            ("PayeeINN", self.payee_inn),
            ("KPP", self.kpp),
        ]


ORGANIZATIONS: Dict[str, Organization] = {
    "org-td": Organization(
        key="org-td",
        name="ООО «ТЕРРИТОРИЯ ДЕТСТВА»",
        display_name="ООО «ТЕРРИТОРИЯ ДЕТСТВА»",
        personal_acc="40702810538000453171",
        bank_name="ПАО Сбербанк",
        bic="044525225",
        corresp_acc="30101810400000000225",
        payee_inn="7725641886",
        kpp="772901001",
        ogrn="1087746828180",
        child_fio=True,
    ),
    "org-sd": Organization(
        key="org-sd",
        name='АНО "СЧАСТЛИВОЕ ДЕТСТВО"',
        display_name="АНО «СЧАСТЛИВОЕ ДЕТСТВО»",
        personal_acc="40703810738000017277",
        bank_name="ПАО Сбербанк",
        bic="044525225",
        corresp_acc="30101810400000000225",
        payee_inn="9729300383",
        kpp="772901001",
    ),
}


def to_kopecks(amount: Union[int, float, str, Decimal, None]) -> int:
    """
    Convert an amount in roubles to kopecks, rounding half up.

    Empty values count as zero.

    Raises:
        ValueError: If the amount is not a number

    Example:
        >>> to_kopecks("150.5")
        15050
    """
    if amount is None or (isinstance(amount, str) and not amount.strip()):
        return 0
    try:
        value = Decimal(str(amount).strip().replace(",", "."))
    except InvalidOperation:
        raise ValueError(f"Invalid amount: {amount!r}") from None
    if not value.is_finite():
        raise ValueError(f"Invalid amount: {amount!r}")
    return int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def build_payment_text(org_key: str, fio: str = "", amount=0, purpose: str = "") -> str:
    """
    Build the payment string for ``org_key``.

    Args:
        org_key (str): Key in :data:`ORGANIZATIONS`
        fio (str): Child's full name (only sent for organizations that take it)
        amount: Amount in roubles
        purpose (str): Payment purpose

    Returns:
        str: The payment string, or "" for an unknown organization

    Example:
        >>> build_payment_text("org-sd", purpose="Взнос", amount=100)[-24:]
        '|Purpose=Взнос|Sum=10000'
    """
    org = ORGANIZATIONS.get(org_key)
    if org is None:
        return ""
    fields = org.fields()
    if org.child_fio:
        fields.append(("ChildFio", fio))
    fields.append(("Purpose", purpose))
    fields.append(("Sum", str(to_kopecks(amount))))
    return "|".join([PAYMENT_HEADER] + [f"{key}={value}" for key, value in fields])


def payment_instruction_lines(org_key: str) -> List[str]:
    """Payment details printed under the QR code; empty for an unknown organization."""
    org = ORGANIZATIONS.get(org_key)
    if org is None:
        return []
    if org.ogrn:
        ids = f"ОГРН {org.ogrn}, ИНН {org.payee_inn}, КПП {org.kpp}"
    else:
        ids = f"ИНН: {org.payee_inn}, КПП: {org.kpp}"
    return [
        "Реквизиты оплаты:",
        f"Наименование организации: {org.display_name}",
        ids,
        f"Расчетный счет № {org.personal_acc}",
        f"Наименование банка: {org.bank_name}, БИК: {org.bic}",
        f"Корреспондентский счет: {org.corresp_acc}",
    ]
