"""
Utilidades numéricas comunes para los agregadores.
Evita duplicación de reglas de redondeo entre servicios.
"""
import math
from decimal import Decimal, ROUND_HALF_UP

from django.utils import timezone


def round_half_up(value) -> int:
    """Redondeo aritmético (0.5 hacia arriba), a diferencia del round() bancario."""
    return int(Decimal(str(value)).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def percentage(part, total) -> int:
    """
    Porcentaje entero round(part / total * 100).

    Con total == 0 devuelve 0 en lugar de dividir por cero.
    """
    if not total:
        return 0
    return round_half_up(part / total * 100)


def safe_mean(total, count) -> float:
    return total / count if count else 0


def is_number(value) -> bool:
    """True para int/float reales y finitos (excluye bool, NaN e infinito)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def as_aware(dt):
    """Fechas sin zona se interpretan en la zona horaria activa."""
    if dt is None or timezone.is_aware(dt):
        return dt
    return timezone.make_aware(dt)


def to_camel(name: str) -> str:
    head, *tail = name.split('_')
    return head + ''.join(part[:1].upper() + part[1:] for part in tail)


def camelize_keys(data):
    """Convierte recursivamente las claves snake_case de dicts/listas a camelCase."""
    if isinstance(data, dict):
        return {to_camel(k) if isinstance(k, str) else k: camelize_keys(v) for k, v in data.items()}
    if isinstance(data, (list, tuple)):
        return [camelize_keys(v) for v in data]
    return data
