# Controllers package initialization
# This file makes the controllers directory a Python package
# and allows importing controller modules

from . import financeiro_controller, relatorios_controller

__all__ = [
    "financeiro_controller",
    "relatorios_controller",
]
