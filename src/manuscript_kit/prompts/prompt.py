import re

from pydantic import BaseModel, ConfigDict, model_validator

_PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}")


class Prompt(BaseModel):
    """A versioned system-prompt template.

    Every `{{ name }}` placeholder in the template must be declared in
    `inputs`, and every declared input must be used.
    """

    model_config = ConfigDict(extra="forbid")

    name: str
    version: str
    description: str
    inputs: dict[str, str] = {}
    template: str

    @model_validator(mode="after")
    def _check_placeholders(self) -> "Prompt":
        used = set(_PLACEHOLDER.findall(self.template))
        if used != set(self.inputs):
            raise ValueError(
                f"Prompt '{self.name}' placeholders {sorted(used)} "
                f"do not match declared inputs {sorted(self.inputs)}"
            )
        return self

    def render(self, **values: str) -> str:
        """Substitute `{{ input }}` placeholders.

        Raises:
            KeyError: If a declared input is missing or an unknown one is given.
        """
        missing = set(self.inputs) - set(values)
        if missing:
            raise KeyError(f"Prompt '{self.name}' missing inputs: {sorted(missing)}")
        unknown = set(values) - set(self.inputs)
        if unknown:
            raise KeyError(
                f"Prompt '{self.name}' got unknown inputs: {sorted(unknown)}"
            )
        return _PLACEHOLDER.sub(lambda m: str(values[m.group(1)]), self.template)
