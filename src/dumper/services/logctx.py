def ctx_prefix(*, pattern: str, index: int | None = None) -> str:
    base = f"dump={pattern.rstrip('.')}"
    return f"{base} page={index}" if index is not None else base
