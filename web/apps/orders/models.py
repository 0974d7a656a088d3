from django.db import models


class OrderModel(models.Model):
    # Surrogate PK, internal to the store
    id = models.BigAutoField(primary_key=True)

    # Public generated id and client business key, both unique
    order_id = models.CharField(max_length=32, unique=True, editable=False)
    order_number = models.CharField(max_length=64, unique=True, null=True, blank=True)

    payment_description = models.CharField(max_length=255, null=True, blank=True)
    street = models.CharField(max_length=255, null=True, blank=True)
    town = models.CharField(max_length=255, null=True, blank=True)
    country = models.CharField(max_length=128, null=True, blank=True)
    amount = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    currency = models.CharField(max_length=3, null=True, blank=True)
    payment_due_date = models.DateField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "orders"

    def __str__(self):
        return f"{self.order_id} ({self.order_number})"
