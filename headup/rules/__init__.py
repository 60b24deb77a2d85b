from headup.rules.models import HeadupConfig, Rule
from headup.rules.repository import ConfigRepository, default_config_path
from headup.rules.resolver import RuleResolver, merge

__all__ = [
    "ConfigRepository",
    "HeadupConfig",
    "Rule",
    "RuleResolver",
    "default_config_path",
    "merge",
]
