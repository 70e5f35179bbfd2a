"""
Языковые наборы правил.

Каждый язык описан отдельным модулем с плоским словарём шаблонов,
реестр собирает их в неизменяемые RuleSet при старте.
"""

from .base import EntityType, Language, RuleSet
from .registry import DEFAULT_REGISTRY, RuleSetRegistry, apply_overrides

__all__ = [
    'EntityType',
    'Language',
    'RuleSet',
    'RuleSetRegistry',
    'DEFAULT_REGISTRY',
    'apply_overrides',
]
