"""Qualified type identifiers: (namespace, local name) pairs in Clark notation."""

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class QualifiedName:
    """A namespace-qualified type name.

    Text form is ``{namespace}local`` or bare ``local`` when the namespace
    is empty. ``parse`` and ``str`` are exact inverses.
    """
    namespace: str
    local_name: str

    def __post_init__(self):
        if not self.local_name:
            raise ValueError("Qualified name must have a non-empty local name")
        if "{" in self.local_name or "}" in self.local_name:
            raise ValueError(f"Local name '{self.local_name}' must not contain braces")
        if self.local_name != self.local_name.strip():
            raise ValueError(f"Local name '{self.local_name}' must not have surrounding whitespace")
        if "}" in self.namespace:
            raise ValueError(f"Namespace '{self.namespace}' must not contain '}}'")

    @classmethod
    def parse(cls, text: str) -> "QualifiedName":
        """Parse ``{ns}local`` or ``local`` into a QualifiedName."""
        value = text.strip()
        if not value.startswith("{"):
            if "{" in value or "}" in value:
                raise ValueError(f"Malformed qualified name '{text}'")
            return cls("", value)

        close = value.find("}")
        if close < 0:
            raise ValueError(f"Malformed qualified name '{text}': missing '}}'")
        namespace = value[1:close]
        local_name = value[close + 1:]
        if not local_name:
            raise ValueError(f"Malformed qualified name '{text}': empty local name")
        return cls(namespace, local_name)

    def __str__(self) -> str:
        if not self.namespace:
            return self.local_name
        return f"{{{self.namespace}}}{self.local_name}"
