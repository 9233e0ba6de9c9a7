"""
Datos de ejemplo para el dashboard.

Los agregadores nunca inventan datos: devuelven listas vacías cuando no hay
drivers o temas reales. La capa de presentación decide mostrar estos ejemplos
con `apply_placeholders`, marcando el payload para que la UI lo indique.
"""
import copy

PLACEHOLDER_DRIVERS = [
    {'question': '', 'driver': 'Calidad de Atención', 'impact': 1.2, 'responses': 0},
    {'question': '', 'driver': 'Tiempo de Espera', 'impact': -0.8, 'responses': 0},
    {'question': '', 'driver': 'Limpieza', 'impact': 0.5, 'responses': 0},
]

PLACEHOLDER_CLUSTERS = [
    {'tag': 'Atención Rápida', 'sentiment': 'positive', 'count': 12},
    {'tag': 'Ambiente Limpio', 'sentiment': 'positive', 'count': 8},
]


def apply_placeholders(payload: dict) -> dict:
    """
    Copia del payload (camelCase) con ejemplos en drivers/clusters vacíos.

    Solo aplica si hay respuestas; nunca reemplaza datos reales.
    """
    result = dict(payload)
    placeholders = []
    if result.get('totalResponses'):
        if not result.get('satisfactionDrivers'):
            result['satisfactionDrivers'] = copy.deepcopy(PLACEHOLDER_DRIVERS)
            placeholders.append('satisfactionDrivers')
        if not result.get('customerClusters'):
            result['customerClusters'] = copy.deepcopy(PLACEHOLDER_CLUSTERS)
            placeholders.append('customerClusters')
    result['placeholders'] = placeholders
    return result
