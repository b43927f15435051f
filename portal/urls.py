from django.urls import path
from portal import views

app_name = 'portal'

urlpatterns = [
    path('projects/', views.project_list, name='project_list'),
    path('payments/initiate/', views.initiate_payment_view, name='initiate_payment'),
    path('payments/confirm/', views.confirm_payment_view, name='confirm_payment'),
]
