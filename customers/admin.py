from django.contrib import admin
from .models import Customer


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ["id", "name", "register", "phone", "owner", "created_at"]
    search_fields = ["name", "register", "phone"]
