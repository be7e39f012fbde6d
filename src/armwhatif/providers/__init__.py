"""Providers - acquire a what-if result and turn it into a Project."""

from .arm_template import ArmTemplateProvider, build_deployment_args
from .cmd import CommandOptions, run_command
from .detect import detect_project_type, WHATIF_JSON, TEMPLATE_JSON, BICEP_TEMPLATE
from .whatif_json import WhatIfJsonProvider

__all__ = [
    "ArmTemplateProvider",
    "build_deployment_args",
    "CommandOptions",
    "run_command",
    "detect_project_type",
    "WHATIF_JSON",
    "TEMPLATE_JSON",
    "BICEP_TEMPLATE",
    "WhatIfJsonProvider",
]
