"""
Seed demo data: admin login, sample clients, projects in every status,
their payments and delivery logs.
"""

import random
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from accounts.models import StudioUser
from delivery.models import DeliveryLog
from payments.models import Payment
from payments.services import generate_transaction_ref
from studio.models import Client, Project
from studio.services import generate_project_password, set_portal_password

DEMO_ADMIN_EMAIL = 'admin@kingkidd.com'
DEMO_ADMIN_PASSWORD = 'demo123'

CLIENTS = [
    {'name': 'John Doe', 'email': 'john.doe@example.com', 'phone': '+254712345678'},
    {'name': 'Sarah Wilson', 'email': 'sarah.wilson@example.com', 'phone': '+254723456789'},
    {'name': 'Michael Brown', 'email': 'michael.brown@example.com', 'phone': '+254734567890'},
    {'name': 'Emily Davis', 'email': 'emily.davis@example.com', 'phone': '+254745678901'},
    {'name': 'James Taylor', 'email': 'james.taylor@example.com', 'phone': '+254756789012'},
]

# (name, album slug, price, status, client index)
PROJECTS = [
    ('Wedding Photo Album - John & Jane', 'wedding-2024', 15000, 'delivered', 0),
    ('Corporate Event Coverage', 'corporate-event', 25000, 'paid', 1),
    ('Birthday Party Photography', 'birthday-bash', 8000, 'pending', 2),
    ('Pre-Wedding Photoshoot', 'pre-wedding', 12000, 'pending', 3),
    ('Product Photography Session', 'product-photos', 18000, 'paid', 4),
    ('Family Portrait Session', 'family-portraits', 10000, 'delivered', 0),
    ('Real Estate Photography', 'real-estate', 20000, 'pending', 1),
    ('Graduation Ceremony Photos', 'graduation', 7500, 'paid', 2),
]

DELIVERY_LABELS = {'email': 'email', 'sms': 'SMS', 'whatsapp': 'WhatsApp'}


class Command(BaseCommand):
    help = 'Seed ShutterDesk demo data'

    def add_arguments(self, parser):
        parser.add_argument(
            '--portal-password',
            default=None,
            help='Give every demo client this portal password',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        admin = StudioUser.objects.filter(email=DEMO_ADMIN_EMAIL).first()
        if admin is None:
            admin = StudioUser.objects.create_superuser(
                email=DEMO_ADMIN_EMAIL, password=DEMO_ADMIN_PASSWORD, name='Admin User',
            )
            self.stdout.write(self.style.SUCCESS(f'Created admin user: {admin.email}'))

        clients = []
        for c in CLIENTS:
            client, created = Client.objects.get_or_create(
                email=c['email'],
                defaults={'name': c['name'], 'phone': c['phone'], 'whatsapp': c['phone']},
            )
            if options['portal_password'] and not client.password:
                set_portal_password(client, options['portal_password'])
            if created:
                self.stdout.write(f'  Created client: {client.name}')
            clients.append(client)

        for name, slug, price, project_status, client_index in PROJECTS:
            client = clients[client_index]
            if Project.objects.filter(client=client, name=name).exists():
                continue

            project = Project.objects.create(
                client=client,
                name=name,
                content_link=f'https://drive.google.com/albums/{slug}',
                password=generate_project_password(),
                price=Decimal(price),
                status=project_status,
            )
            self.stdout.write(f'  Created project: {name} ({project_status})')

            if project.is_unlocked:
                Payment.objects.create(
                    project=project,
                    amount=project.price,
                    method=random.choice(['mpesa', 'paypal', 'bank']),
                    status=Payment.STATUS_CONFIRMED,
                    transaction_ref=generate_transaction_ref(),
                    confirmed_at=timezone.now(),
                )

            if project.status == Project.STATUS_DELIVERED:
                for method, label in DELIVERY_LABELS.items():
                    DeliveryLog.objects.create(
                        project=project,
                        method=method,
                        status=DeliveryLog.STATUS_SENT,
                        recipient=client.email if method == 'email' else client.phone,
                        message=f'Password sent via {label}',
                    )

        self.stdout.write(self.style.SUCCESS('\nDemo data complete!'))
