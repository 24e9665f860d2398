from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from .models import User, Profile


@admin.register(User)
class PrepUserAdmin(UserAdmin):
    list_display = ("email", "username", "is_staff", "date_joined")
    ordering = ("email",)


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ("user", "nickname", "goal_score", "created_at")
    filter_horizontal = ("selected_subjects",)
