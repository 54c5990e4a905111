"""go.mod handling: decode the fetched blob, pull out the module path, check the prefix."""

GO_MOD = "go.mod"

_MODULE_DIRECTIVE = "module "


class ManifestDecodeError(ValueError):
    """Raised when a fetched go.mod cannot be turned into text."""


def decode_manifest(raw: bytes) -> str:
    """Decode raw go.mod bytes as UTF-8."""
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ManifestDecodeError(f"{GO_MOD} is not valid UTF-8: {e}") from e


def parse_module_name(text: str) -> str:
    """Extract the module path from go.mod text.

    Returns "" when no `module` directive is present.
    """
    for line in text.splitlines():
        stripped = line.strip()
        if stripped.startswith(_MODULE_DIRECTIVE):
            return stripped[len(_MODULE_DIRECTIVE):].strip()
    return ""


def has_base_prefix(identifier: str, base_package: str) -> bool:
    return bool(identifier) and identifier.startswith(base_package)
