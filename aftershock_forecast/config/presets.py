"""
Aftershock model presets for different tectonic regimes.

Add new regimes here to extend support.

References:
- NZ Generic / Subduction Zone: Earth Sciences New Zealand calibrations
- California (ACR): Reasenberg & Jones (1989, 1994); Hardebeck et al. (2018)
- Stable Continental: Page et al. (2016) global SCR parameters
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from aftershock_forecast.core.models import ModelParameters
from aftershock_forecast.config.settings import DEFAULT_PRESET_CODE


@dataclass(frozen=True)
class ModelPreset:
    """A named parameter set for one tectonic regime."""
    code: str                    # Short code (e.g., "nz")
    name: str                    # Display name
    description: str             # One-line summary of the regime
    parameters: ModelParameters


# =============================================================================
# PRESET DEFINITIONS
# =============================================================================

NZ_GENERIC = ModelPreset(
    code="nz",
    name="NZ Generic",
    description="New Zealand active continental region (ESNZ)",
    parameters=ModelParameters(a=-1.59, b=1.03, c=0.04, p=1.07),
)

SUBDUCTION_ZONE = ModelPreset(
    code="sz",
    name="Subduction Zone",
    description="NZ Hikurangi/Puysegur subduction zones (ESNZ)",
    parameters=ModelParameters(a=-1.97, b=1.0, c=0.018, p=0.92),
)

CALIFORNIA = ModelPreset(
    code="california",
    name="California (ACR)",
    description="Active Continental Region - Reasenberg & Jones (1989)",
    parameters=ModelParameters(a=-1.67, b=0.91, c=0.05, p=1.08),
)

STABLE_CONTINENTAL = ModelPreset(
    code="scr",
    name="Stable Continental",
    description="Stable Continental Region - Page et al. (2016)",
    parameters=ModelParameters(a=-2.5, b=1.0, c=0.05, p=1.0),
)


# =============================================================================
# PRESET REGISTRY
# =============================================================================

# Code reported for parameters that do not come unchanged from a preset
CUSTOM_PRESET_CODE = "custom"

# Read-only: callers pass this (or their own mapping) into the engine
PRESETS: Mapping[str, ModelPreset] = MappingProxyType({
    preset.code: preset
    for preset in (NZ_GENERIC, SUBDUCTION_ZONE, CALIFORNIA, STABLE_CONTINENTAL)
})


def get_preset(code: str, presets: Mapping[str, ModelPreset] = PRESETS) -> ModelPreset:
    """
    Get a model preset by code.

    Args:
        code: Preset code (e.g., "nz"), case-insensitive
        presets: Registry to search (defaults to the built-in presets)

    Returns:
        ModelPreset for the requested regime

    Raises:
        KeyError: If the preset code is not found
    """
    code = code.lower()
    if code not in presets:
        available = ", ".join(presets.keys())
        raise KeyError(f"Preset '{code}' not found. Available: {available}")
    return presets[code]


def list_presets(presets: Mapping[str, ModelPreset] = PRESETS) -> list[str]:
    """Return list of available preset codes."""
    return list(presets.keys())


def get_default_preset(presets: Mapping[str, ModelPreset] = PRESETS) -> ModelPreset:
    """
    Get the preset named by AFTERSHOCK_DEFAULT_PRESET.

    Looked up on each call.

    Raises:
        KeyError: If the configured code is not in the registry
    """
    return get_preset(DEFAULT_PRESET_CODE, presets)
