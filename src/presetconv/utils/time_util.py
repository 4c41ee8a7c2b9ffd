def format_runtime(seconds: float) -> str:
    seconds = max(int(seconds), 0)
    hours = seconds // 3600
    mins = (seconds % 3600) // 60
    secs = seconds % 60
    return f"{hours:02d}:{mins:02d}:{secs:02d}"


def format_duration(seconds: float) -> str:
    seconds = max(int(seconds), 0)
    hours = seconds // 3600
    mins = (seconds % 3600) // 60
    secs = seconds % 60
    if hours > 0:
        return f"{hours}h{mins}m{secs}s"
    if mins > 0:
        return f"{mins}m{secs}s"
    return f"{secs}s"
