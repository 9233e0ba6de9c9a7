"""
Utilidades de logging para el proyecto.
Incluye el decorador de performance y el helper de logging estructurado.
"""
import time
import logging
import inspect
import functools
from typing import Any, Callable, Optional
from django.conf import settings

# Loggers especializados
performance_logger = logging.getLogger('core.performance')


def _report_elapsed(func: Callable, start_time: float, threshold_ms: float) -> None:
    elapsed_time = (time.perf_counter() - start_time) * 1000
    if elapsed_time > threshold_ms:
        performance_logger.warning(
            f"Slow operation: {func.__module__}.{func.__name__} "
            f"took {elapsed_time:.2f}ms (threshold: {threshold_ms}ms)"
        )
    elif settings.DEBUG:
        performance_logger.debug(
            f"{func.__module__}.{func.__name__} took {elapsed_time:.2f}ms"
        )


def log_performance(threshold_ms: Optional[float] = None):
    """
    Decorador para loggear el tiempo de ejecución de funciones (sync o async).
    Sin umbral explícito usa settings.ANALYTICS_SLOW_THRESHOLD_MS.
    """
    def decorator(func: Callable) -> Callable:
        def _threshold() -> float:
            if threshold_ms is not None:
                return threshold_ms
            return getattr(settings, 'ANALYTICS_SLOW_THRESHOLD_MS', 1000.0)

        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs) -> Any:
                start_time = time.perf_counter()
                try:
                    return await func(*args, **kwargs)
                finally:
                    _report_elapsed(func, start_time, _threshold())
            return async_wrapper

        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            start_time = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                _report_elapsed(func, start_time, _threshold())
        return wrapper
    return decorator


class StructuredLogger:
    """
    Helper class para logging estructurado con contexto.
    Soporta *args y kwargs estándar de logging (exc_info, extra, stack_info).
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def _format_message(self, message: str, **context) -> str:
        if context:
            # Convertimos el contexto a string para agregarlo al mensaje
            context_str = ' | '.join(f"{k}={v}" for k, v in context.items())
            return f"{message} | {context_str}"
        return message

    def _log(self, level_func, message, args, kwargs):
        # Extraer argumentos reservados de logging estándar
        exc_info = kwargs.pop('exc_info', None)
        stack_info = kwargs.pop('stack_info', False)
        extra = kwargs.pop('extra', None)

        # El resto de kwargs son contexto para el mensaje visual
        formatted_msg = self._format_message(str(message), **kwargs)
        level_func(formatted_msg, *args, exc_info=exc_info, stack_info=stack_info, extra=extra)

    def debug(self, message: str, *args, **context):
        self._log(self.logger.debug, message, args, context)

    def info(self, message: str, *args, **context):
        self._log(self.logger.info, message, args, context)

    def warning(self, message: str, *args, **context):
        self._log(self.logger.warning, message, args, context)

    def error(self, message: str, *args, **context):
        self._log(self.logger.error, message, args, context)

    def exception(self, message: str, *args, **context):
        # exception() necesita exc_info=True para adjuntar el traceback
        context.setdefault('exc_info', True)
        self._log(self.logger.error, message, args, context)

    def critical(self, message: str, *args, **context):
        self._log(self.logger.critical, message, args, context)
