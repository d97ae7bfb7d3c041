"""JSON formatter for the gate result."""

import json

from ..core.gate import GateResult
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render the gate result as a JSON document on stdout."""

    def render(self, result: GateResult) -> None:
        print(self.format(result))

    def format(self, result: GateResult) -> str:
        return json.dumps(result.to_dict(), indent=2)
