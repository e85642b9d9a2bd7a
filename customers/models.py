from django.conf import settings
from django.db import models


class CustomerQuerySet(models.QuerySet):
    def owned_by(self, owner):
        return self.filter(owner=owner)


class Customer(models.Model):
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="customers"
    )
    name = models.CharField(max_length=255)
    register = models.CharField(max_length=64, null=True, blank=True)
    phone = models.CharField(max_length=32, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CustomerQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at", "-id"]
        constraints = [
            models.UniqueConstraint(
                fields=["owner", "register"], name="unique_customer_register_per_owner"
            )
        ]

    def __str__(self):
        return f"{self.name} ({self.owner.username})"
