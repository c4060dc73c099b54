Cmd = tuple[str, ...]
Args = tuple[str, ...]
