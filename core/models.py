# core/models.py
from django.db import models
from django.contrib.auth.models import User
from django.db.models.signals import post_save
from django.dispatch import receiver


class UserProfile(models.Model):
    """
    Perfil extendido del usuario con su nivel de plan (Free / Pro).
    La facturación vive en la pasarela de pagos; aquí solo se lee el flag.
    """
    PLAN_FREE = 'free'
    PLAN_PRO = 'pro'
    PLAN_CHOICES = [
        (PLAN_FREE, 'Gratis'),
        (PLAN_PRO, 'Pro'),
    ]

    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='profile')
    company_name = models.CharField(max_length=100, blank=True, null=True, verbose_name="Empresa")
    plan = models.CharField(max_length=10, choices=PLAN_CHOICES, default=PLAN_FREE, db_index=True)

    def __str__(self):
        return f"Perfil de {self.user.username} ({self.get_plan_display()})"

    @property
    def is_pro(self):
        return self.plan == self.PLAN_PRO


# --- SEÑALES AUTOMÁTICAS ---
@receiver(post_save, sender=User)
def create_user_profile(sender, instance, created, **kwargs):
    """Asigna perfil con plan gratuito al registrarse."""
    if created:
        UserProfile.objects.get_or_create(user=instance)
