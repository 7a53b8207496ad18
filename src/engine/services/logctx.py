def ctx_prefix(*, pname: str, rid: str, src: str | None = None, dst: str | None = None) -> str:
    base = f"pipeline={pname} run={rid}"
    return f"{base} {src}->{dst}" if src and dst else base
