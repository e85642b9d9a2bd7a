from django.conf import settings
from django.db import models
from django.utils import timezone


class LoanQuerySet(models.QuerySet):
    def owned_by(self, owner):
        return self.filter(owner=owner)

    def active(self):
        return self.filter(status=Loan.STATUS_ACTIVE)


class Loan(models.Model):
    KIND_BORROWED = "BORROWED"
    KIND_LENT = "LENT"
    KIND_CHOICES = [
        (KIND_BORROWED, "Borrowed"),
        (KIND_LENT, "Lent"),
    ]

    STATUS_ACTIVE = "ACTIVE"
    STATUS_PAID = "PAID"
    STATUS_OVERDUE = "OVERDUE"
    STATUS_CHOICES = [
        (STATUS_ACTIVE, "Active"),
        (STATUS_PAID, "Paid"),
        (STATUS_OVERDUE, "Overdue"),
    ]

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="loans"
    )
    customer = models.ForeignKey(
        "customers.Customer",
        on_delete=models.PROTECT,
        related_name="loans",
        null=True,
        blank=True,
    )
    other_party = models.CharField(max_length=255, blank=True, default="")
    principal = models.DecimalField(max_digits=14, decimal_places=2)
    remaining = models.DecimalField(max_digits=14, decimal_places=2)
    kind = models.CharField(max_length=10, choices=KIND_CHOICES)
    status = models.CharField(
        max_length=10, choices=STATUS_CHOICES, default=STATUS_ACTIVE
    )
    opened_date = models.DateTimeField(default=timezone.now)
    due_date = models.DateTimeField(null=True, blank=True)
    description = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = LoanQuerySet.as_manager()

    class Meta:
        ordering = ["-opened_date", "-id"]

    @property
    def counterparty(self):
        if self.customer_id:
            return self.customer.name
        return self.other_party

    @property
    def total_paid(self):
        return self.principal - self.remaining

    def __str__(self):
        return f"Loan #{self.id} - {self.kind} {self.principal} - {self.status}"
