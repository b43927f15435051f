from django.urls import path
from dashboard import views

app_name = 'dashboard'

urlpatterns = [
    # Dashboard
    path('dashboard/', views.dashboard_stats, name='dashboard_stats'),

    # Clients
    path('clients/', views.client_list, name='client_list'),
    path('clients/<uuid:client_id>/', views.client_detail, name='client_detail'),
    path('clients/<uuid:client_id>/portal-password/', views.client_portal_password, name='client_portal_password'),

    # Projects
    path('projects/', views.project_list, name='project_list'),
    path('projects/<uuid:project_id>/', views.project_detail, name='project_detail'),
    path('projects/<uuid:project_id>/deliver/', views.project_deliver, name='project_deliver'),

    # Payments
    path('payments/', views.payment_list, name='payment_list'),
    path('payments/simulate/', views.payment_simulate, name='payment_simulate'),

    # Delivery logs
    path('delivery-logs/', views.delivery_log_list, name='delivery_log_list'),
]
