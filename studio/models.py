import uuid

from django.db import models
from django.db.models.functions import Lower


class Client(models.Model):
    """
    A studio customer. A non-null `password` (salted hash) enables portal login.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=150)
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=20, null=True, blank=True, db_index=True)
    whatsapp = models.CharField(max_length=20, null=True, blank=True)
    password = models.CharField(max_length=128, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(Lower('email'), name='client_email_ci_unique'),
        ]

    def __str__(self):
        return f'{self.name} <{self.email}>'

    @property
    def has_portal_access(self):
        return bool(self.password)


class Project(models.Model):
    STATUS_PENDING = 'pending'
    STATUS_PAID = 'paid'
    STATUS_DELIVERED = 'delivered'

    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_PAID, 'Paid'),
        (STATUS_DELIVERED, 'Delivered'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    client = models.ForeignKey(Client, on_delete=models.PROTECT, related_name='projects')
    name = models.CharField(max_length=200)
    content_link = models.URLField(max_length=500)
    password = models.CharField(max_length=32, unique=True)
    price = models.DecimalField(max_digits=12, decimal_places=2)
    status = models.CharField(max_length=15, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['client', 'status'], name='project_client_status_idx'),
        ]

    def __str__(self):
        return f'{self.name} ({self.status})'

    @property
    def is_unlocked(self):
        return self.status in (self.STATUS_PAID, self.STATUS_DELIVERED)
