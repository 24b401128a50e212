import re

from pydantic import BaseModel

_PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}")


class Prompt(BaseModel):
    name: str
    version: str
    description: str
    inputs: dict[str, str]
    template: str
    system: str | None = None

    class Config:
        extra = "forbid"

    def render(self, **values: object) -> str:
        """Fill ``{{ name }}`` placeholders; every declared input is required."""
        missing = sorted(set(self.inputs) - set(values))
        if missing:
            raise ValueError(
                f"Prompt '{self.name}' missing inputs: {', '.join(missing)}"
            )

        def substitute(match: re.Match[str]) -> str:
            key = match.group(1)
            if key not in values:
                raise ValueError(
                    f"Prompt '{self.name}' has undeclared placeholder: {key}"
                )
            return str(values[key])

        return _PLACEHOLDER.sub(substitute, self.template)
