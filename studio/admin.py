from django import forms
from django.contrib import admin
from studio.models import Client, Project
from studio.services import generate_project_password


class ProjectAdminForm(forms.ModelForm):
    class Meta:
        model = Project
        fields = ['client', 'name', 'content_link', 'price']

    def clean_price(self):
        price = self.cleaned_data['price']
        if price is not None and price <= 0:
            raise forms.ValidationError('Price must be greater than zero')
        if self.instance.pk and self.instance.status != Project.STATUS_PENDING and price != self.instance.price:
            raise forms.ValidationError('Price cannot change after payment')
        return price


class ProjectInline(admin.TabularInline):
    """Read-only overview; projects are added from the project admin."""

    model = Project
    extra = 0
    fields = ['name', 'price', 'status', 'created_at']
    readonly_fields = fields
    show_change_link = True
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ['name', 'email', 'phone', 'whatsapp', 'has_portal_access', 'created_at']
    search_fields = ['name', 'email', 'phone']
    readonly_fields = ['id', 'password', 'created_at', 'updated_at']
    inlines = [ProjectInline]

    @admin.display(boolean=True, description='Portal')
    def has_portal_access(self, obj):
        return obj.has_portal_access

    def save_model(self, request, obj, form, change):
        obj.email = obj.email.strip().lower()
        super().save_model(request, obj, form, change)


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    form = ProjectAdminForm
    list_display = ['name', 'client', 'price', 'status', 'created_at']
    list_filter = ['status']
    search_fields = ['name', 'client__name', 'client__email']
    # Status moves only through the payment and delivery services
    readonly_fields = ['id', 'password', 'status', 'created_at', 'updated_at']

    def save_model(self, request, obj, form, change):
        if not obj.password:
            obj.password = generate_project_password()
        super().save_model(request, obj, form, change)
