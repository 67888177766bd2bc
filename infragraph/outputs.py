"""
Rendering of stack outputs for humans.

Sensitive outputs are masked unless the caller explicitly asks to reveal them.
"""

from typing import Any, Dict, List

from .errors import SensitiveValueExposure
from .graph.model import OutputValue

MASK = "[secret]"


def plaintext(output: OutputValue, value: Any, reveal: bool = False) -> str:
    """
    Return the plaintext of an output value.

    Raises:
        SensitiveValueExposure: The output is sensitive and reveal is False
    """
    if output.sensitive and not reveal:
        raise SensitiveValueExposure(output.name)
    return "" if value is None else str(value)


def render_output(output: OutputValue, value: Any, reveal: bool = False) -> str:
    """Render an output value, masking it if it is sensitive."""
    if output.sensitive and not reveal:
        return MASK
    return plaintext(output, value, reveal)


def render_outputs(outputs: List[OutputValue], values: Dict[str, Any], reveal: bool = False) -> Dict[str, str]:
    """Render every declared output found in values."""
    return {
        output.name: render_output(output, values[output.name], reveal)
        for output in outputs
        if output.name in values
    }
