"""Rigol DS1000Z-family model names and capabilities.

The model table maps the model name reported in the ``*IDN?`` response to a
:class:`ScopeModel` member. Both tables are built once at import and exposed
read-only.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class ScopeModel(Enum):
    """Scope models. Values are the names from the technical documentation."""

    MSO1104Z_S = "MSO1104Z-S"
    MSO1074Z_S = "MSO1074Z-S"
    MSO1104Z = "MSO1104Z"
    MSO1074Z = "MSO1074Z"
    DS1104Z_S_PLUS = "DS1104Z-S Plus"
    DS1074Z_S_PLUS = "DS1074Z-S Plus"
    DS1104Z_PLUS = "DS1104Z Plus"
    DS1074Z_PLUS = "DS1074Z Plus"
    DS1054Z = "DS1054Z"

    def __str__(self) -> str:
        return self.value


class Bandwidth(Enum):
    """Analog bandwidth in MHz."""

    MHZ_50 = 50
    MHZ_70 = 70
    MHZ_100 = 100


class AnalogChannels(Enum):
    """Analog channel count."""

    COUNT_2 = 2
    COUNT_4 = 4


class DigitalChannels(Enum):
    """Digital channel count."""

    NONE = 0
    COUNT_16 = 16


@dataclass(frozen=True)
class ModelCapabilities:
    """Hardware capabilities of a scope model.

    Attributes:
        analog_bandwidth: Analog front-end bandwidth.
        analog_channels: Number of analog inputs.
        digital_channels: Number of logic-analyzer inputs.
    """

    analog_bandwidth: Bandwidth
    analog_channels: AnalogChannels
    digital_channels: DigitalChannels


MODEL_NAMES: Mapping[str, ScopeModel] = MappingProxyType(
    {model.value: model for model in ScopeModel}
)

_CAPABILITIES: Mapping[ScopeModel, ModelCapabilities] = MappingProxyType(
    {
        ScopeModel.MSO1104Z_S: ModelCapabilities(
            Bandwidth.MHZ_100, AnalogChannels.COUNT_4, DigitalChannels.COUNT_16
        ),
        ScopeModel.MSO1074Z_S: ModelCapabilities(
            Bandwidth.MHZ_70, AnalogChannels.COUNT_4, DigitalChannels.COUNT_16
        ),
        ScopeModel.MSO1104Z: ModelCapabilities(
            Bandwidth.MHZ_100, AnalogChannels.COUNT_4, DigitalChannels.COUNT_16
        ),
        ScopeModel.MSO1074Z: ModelCapabilities(
            Bandwidth.MHZ_70, AnalogChannels.COUNT_4, DigitalChannels.COUNT_16
        ),
        ScopeModel.DS1104Z_S_PLUS: ModelCapabilities(
            Bandwidth.MHZ_100, AnalogChannels.COUNT_4, DigitalChannels.COUNT_16
        ),
        ScopeModel.DS1074Z_S_PLUS: ModelCapabilities(
            Bandwidth.MHZ_70, AnalogChannels.COUNT_4, DigitalChannels.COUNT_16
        ),
        ScopeModel.DS1104Z_PLUS: ModelCapabilities(
            Bandwidth.MHZ_100, AnalogChannels.COUNT_4, DigitalChannels.COUNT_16
        ),
        ScopeModel.DS1074Z_PLUS: ModelCapabilities(
            Bandwidth.MHZ_70, AnalogChannels.COUNT_4, DigitalChannels.COUNT_16
        ),
        ScopeModel.DS1054Z: ModelCapabilities(
            Bandwidth.MHZ_50, AnalogChannels.COUNT_4, DigitalChannels.NONE
        ),
    }
)


def to_model(name: str) -> ScopeModel:
    """Look up a model by its exact documented name.

    Args:
        name: Model name as reported by ``*IDN?`` (e.g. ``"DS1054Z"``).

    Returns:
        The matching :class:`ScopeModel`.

    Raises:
        ValueError: If the name does not correspond to any model.
    """
    try:
        return MODEL_NAMES[name]
    except KeyError:
        raise ValueError(f"Model name is unknown: {name!r}") from None


def get_model_capabilities(model: ScopeModel) -> ModelCapabilities:
    """Return the hardware capabilities of *model*."""
    return _CAPABILITIES[model]
