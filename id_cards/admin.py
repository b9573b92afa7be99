from django.contrib import admin
from .models import IdCard


@admin.register(IdCard)
class IdCardAdmin(admin.ModelAdmin):
    list_display = ('id_card_number', 'full_name', 'employee_type', 'department', 'designation', 'is_active')
    list_filter = ('employee_type', 'blood_group', 'department', 'is_active')
    search_fields = ('id_card_number', 'full_name', 'email')
    readonly_fields = ('id_card_number', 'created_by', 'created_at', 'updated_at')

    fieldsets = (
        ('Employee', {
            'fields': ('id_card_number', 'full_name', 'employee_type', 'employee_picture', 'blood_group')
        }),
        ('Contact', {
            'fields': ('email', 'mobile_number', 'street', 'city', 'state', 'zip_code', 'country')
        }),
        ('Employment', {
            'fields': ('department', 'designation', 'date_of_birth', 'date_of_joining', 'is_active')
        }),
        ('Timestamps', {
            'fields': ('created_by', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )
