import uuid

from django.db import models


class DeliveryLog(models.Model):
    METHOD_CHOICES = [
        ('email', 'Email'),
        ('sms', 'SMS'),
        ('whatsapp', 'WhatsApp'),
    ]

    STATUS_SENT = 'sent'
    STATUS_FAILED = 'failed'

    STATUS_CHOICES = [
        (STATUS_SENT, 'Sent'),
        (STATUS_FAILED, 'Failed'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    project = models.ForeignKey('studio.Project', on_delete=models.CASCADE, related_name='delivery_logs')
    method = models.CharField(max_length=10, choices=METHOD_CHOICES)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, db_index=True)
    recipient = models.CharField(max_length=254, blank=True, default='')
    message = models.TextField(blank=True, default='')
    sent_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-sent_at']
        indexes = [
            models.Index(fields=['project', 'method'], name='delivery_project_method_idx'),
        ]

    def __str__(self):
        return f'{self.method} to {self.recipient or "-"} - {self.status}'
