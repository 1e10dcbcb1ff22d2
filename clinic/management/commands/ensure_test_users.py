from django.core.management.base import BaseCommand
from django.contrib.auth.hashers import make_password
from clinic.models import User

# the demo logins the front end ships with
TEST_SET = [
    ("admin@hospital.com", "Admin", "User", "admin", "admin123"),
    ("doctor@hospital.com", "Sarah", "Johnson", "doctor", "doctor123"),
    ("nurse@hospital.com", "Nurse", "Smith", "nurse", "nurse123"),
]


class Command(BaseCommand):
    help = "Ensure the demo admin/doctor/nurse logins exist with their known passwords (idempotent)."

    def handle(self, *args, **opts):
        for email, first, last, role, password in TEST_SET:
            u, created = User.objects.get_or_create(
                username=email,
                defaults={
                    "email": email, "first_name": first, "last_name": last, "role": role,
                    "password": make_password(password), "is_active": True,
                    "is_staff": role == "admin",
                },
            )
            if not created:
                u.password = make_password(password)
                u.role = role
                u.is_active = True
                u.save(update_fields=["password", "role", "is_active"])
            self.stdout.write(self.style.SUCCESS(f"ok: {email} ({role})"))
        self.stdout.write(self.style.SUCCESS("All test users ensured."))
