# lending/services.py

"""
Loan balance accounting.

Every operation goes through an ``OwnerLedger`` bound to the authenticated
user. Lookups are always filtered by that owner, so a loan that belongs to
somebody else raises ``NotFound`` exactly like a loan that does not exist.

``Loan.remaining`` is maintained incrementally: each mutating operation
locks the loan row, writes the payment row and the new balance inside one
transaction, and either both land or neither does.
"""

from contextlib import contextmanager
from decimal import Decimal, InvalidOperation
import logging

from django.db import DatabaseError, transaction
from django.db.models import Count, Sum
from django.utils import timezone

from customers.models import Customer
from payment.models import Payment
from .exceptions import NotFound, StorageError, ValidationError
from .models import Loan

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")
CENT = Decimal("0.01")
FULL_SETTLEMENT_DESCRIPTION = "Full settlement"

LOAN_KINDS = [kind for kind, _ in Loan.KIND_CHOICES]
LOAN_STATUSES = [status for status, _ in Loan.STATUS_CHOICES]


def to_amount(value, label="Amount"):
    """Coerce ``value`` to a finite Decimal or raise ValidationError."""
    if value is None or value == "":
        raise ValidationError(f"{label} is required")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(f"{label} must be a number")
    if not amount.is_finite():
        raise ValidationError(f"{label} must be a number")
    # Stored with two decimal places; anything finer would be rounded on save
    if amount != amount.quantize(CENT):
        raise ValidationError(f"{label} must have at most two decimal places")
    return amount.quantize(CENT)


class OwnerLedger:
    """Loan and payment operations scoped to a single owner."""

    def __init__(self, owner):
        self.owner = owner

    @property
    def loans(self):
        return Loan.objects.owned_by(self.owner)

    @property
    def customers(self):
        return Customer.objects.owned_by(self.owner)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @contextmanager
    def _unit_of_work(self, action):
        try:
            with transaction.atomic():
                yield
        except DatabaseError as exc:
            logger.exception(f"Storage failure while trying to {action} for user {self.owner.pk}")
            raise StorageError(f"Could not {action}") from exc

    def _with_details(self, queryset):
        return (
            queryset.select_related("customer")
            .prefetch_related("payments")
            .annotate(payment_count=Count("payments"))
        )

    def _locked_loan(self, loan_id):
        # Must be called inside _unit_of_work
        try:
            return self.loans.select_for_update().get(pk=loan_id)
        except Loan.DoesNotExist:
            raise NotFound("Loan not found")

    def _customer(self, customer_id):
        try:
            return self.customers.get(pk=customer_id)
        except (Customer.DoesNotExist, ValueError, TypeError):
            raise NotFound("Customer not found")

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def list_loans(self):
        with self._unit_of_work("list loans"):
            return list(self._with_details(self.loans))

    def get_loan(self, loan_id):
        with self._unit_of_work("load loan"):
            try:
                return self._with_details(self.loans).get(pk=loan_id)
            except Loan.DoesNotExist:
                raise NotFound("Loan not found")

    def payment_history(self, loan_id):
        with self._unit_of_work("load payment history"):
            if not self.loans.filter(pk=loan_id).exists():
                raise NotFound("Loan not found")
            return list(Payment.objects.filter(loan_id=loan_id))

    def statistics(self):
        """
        Totals over the owner's ACTIVE loans only.

        PAID and OVERDUE loans are left out of both partitions.
        """
        stats = {
            "borrowed": {"count": 0, "total": ZERO},
            "lent": {"count": 0, "total": ZERO},
        }
        with self._unit_of_work("compute loan statistics"):
            rows = (
                self.loans.active()
                .order_by()
                .values("kind")
                .annotate(count=Count("id"), total=Sum("remaining"))
            )
            for row in rows:
                bucket = stats[row["kind"].lower()]
                bucket["count"] = row["count"]
                bucket["total"] = row["total"] or ZERO

        stats["net_balance"] = stats["lent"]["total"] - stats["borrowed"]["total"]
        return stats

    # -------------------------------------------------------------------------
    # Loan lifecycle
    # -------------------------------------------------------------------------

    def create_loan(
        self,
        principal,
        kind,
        customer_id=None,
        other_party=None,
        opened_date=None,
        due_date=None,
        description=None,
    ):
        if principal in (None, "") or not kind:
            raise ValidationError("Principal and kind are required")

        principal = to_amount(principal, "Principal")
        if principal <= 0:
            raise ValidationError("Principal must be positive")

        if kind not in LOAN_KINDS:
            raise ValidationError("Kind must be either BORROWED or LENT")

        if not customer_id and not other_party:
            raise ValidationError("Either customer or other_party is required")

        with self._unit_of_work("create loan"):
            customer = self._customer(customer_id) if customer_id else None
            loan = Loan.objects.create(
                owner=self.owner,
                customer=customer,
                other_party=other_party or "",
                principal=principal,
                remaining=principal,
                kind=kind,
                status=Loan.STATUS_ACTIVE,
                opened_date=opened_date or timezone.now(),
                due_date=due_date,
                description=description,
            )

        logger.info(f"Loan {loan.pk} created: {kind} {principal} for user {self.owner.pk}")
        return self.get_loan(loan.pk)

    def edit_loan(self, loan_id, changes):
        """
        Apply a partial update.

        A new principal keeps what has been paid so far and recomputes
        ``remaining = max(0, new_principal - total_paid)``. A forced status
        is stored as given, without checking it against ``remaining``.
        """
        with self._unit_of_work("update loan"):
            loan = self._locked_loan(loan_id)

            if "principal" in changes:
                new_principal = to_amount(changes["principal"], "Principal")
                if new_principal <= 0:
                    raise ValidationError("Principal must be positive")
                total_paid = loan.principal - loan.remaining
                loan.principal = new_principal
                loan.remaining = max(ZERO, new_principal - total_paid)

            if "customer_id" in changes:
                customer_id = changes["customer_id"]
                loan.customer = self._customer(customer_id) if customer_id else None

            if "other_party" in changes:
                loan.other_party = changes["other_party"] or ""

            if "description" in changes:
                loan.description = changes["description"]

            # Dates are only replaced, never cleared
            for field in ("opened_date", "due_date"):
                if changes.get(field):
                    setattr(loan, field, changes[field])

            if changes.get("status"):
                if changes["status"] not in LOAN_STATUSES:
                    raise ValidationError("Status must be one of ACTIVE, PAID or OVERDUE")
                loan.status = changes["status"]

            if not loan.customer_id and not loan.other_party:
                raise ValidationError("Either customer or other_party is required")

            loan.save()

        logger.info(f"Loan {loan.pk} updated: remaining={loan.remaining} status={loan.status}")
        return self.get_loan(loan.pk)

    def delete_loan(self, loan_id):
        with self._unit_of_work("delete loan"):
            loan = self._locked_loan(loan_id)
            loan.delete()

        logger.info(f"Loan {loan_id} and its payments deleted for user {self.owner.pk}")

    # -------------------------------------------------------------------------
    # Payments
    # -------------------------------------------------------------------------

    def add_payment(self, loan_id, amount, payment_date=None, description=None):
        amount = to_amount(amount)
        if amount <= 0:
            raise ValidationError("Payment amount must be positive")

        with self._unit_of_work("add payment"):
            loan = self._locked_loan(loan_id)

            if amount > loan.remaining:
                logger.warning(
                    f"Refused payment of {amount} on loan {loan.pk}: remaining is {loan.remaining}"
                )
                raise ValidationError(
                    f"Payment amount exceeds remaining balance of {loan.remaining}"
                )

            payment = Payment.objects.create(
                loan=loan,
                amount=amount,
                payment_date=payment_date or timezone.now(),
                description=description,
            )

            loan.remaining = loan.remaining - amount
            if loan.remaining == 0:
                loan.status = Loan.STATUS_PAID
            loan.save(update_fields=["remaining", "status", "updated_at"])

        logger.info(f"Payment {payment.pk} of {amount} added to loan {loan.pk}, remaining {loan.remaining}")
        return self.get_loan(loan.pk)

    def remove_payment(self, loan_id, payment_id):
        """
        Delete a payment and give its amount back to the loan.

        The loan always goes back to ACTIVE, whatever its status was before.
        """
        with self._unit_of_work("remove payment"):
            loan = self._locked_loan(loan_id)
            try:
                payment = Payment.objects.get(pk=payment_id, loan=loan)
            except Payment.DoesNotExist:
                raise NotFound("Payment not found")

            amount = payment.amount
            payment.delete()

            loan.remaining = loan.remaining + amount
            loan.status = Loan.STATUS_ACTIVE
            loan.save(update_fields=["remaining", "status", "updated_at"])

        logger.info(f"Payment {payment_id} removed from loan {loan.pk}, remaining {loan.remaining}")
        return self.get_loan(loan.pk)

    def mark_fully_paid(self, loan_id):
        with self._unit_of_work("mark loan as paid"):
            loan = self._locked_loan(loan_id)

            if loan.remaining > 0:
                Payment.objects.create(
                    loan=loan,
                    amount=loan.remaining,
                    payment_date=timezone.now(),
                    description=FULL_SETTLEMENT_DESCRIPTION,
                )

            loan.remaining = ZERO
            loan.status = Loan.STATUS_PAID
            loan.save(update_fields=["remaining", "status", "updated_at"])

        logger.info(f"Loan {loan.pk} marked as paid")
        return self.get_loan(loan.pk)
