from django.urls import path
from accounts import views

app_name = 'accounts'

urlpatterns = [
    # Session
    path('login/', views.login, name='login'),
    path('logout/', views.logout, name='logout'),
    path('me/', views.me, name='me'),

    # One-time codes
    path('otp/send/', views.send_otp, name='send_otp'),
    path('otp/verify/', views.verify_otp_view, name='verify_otp'),
]
