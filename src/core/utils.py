def fmt_duration(seconds: int | None) -> str:
    """
    m:ss, the way track durations are shown in the results and the bar.
    """
    if seconds is None:
        return ""
    seconds = max(0, int(seconds))
    m = seconds // 60
    s = seconds % 60
    return f"{m}:{s:02d}"


def fmt_ms(ms: int) -> str:
    return fmt_duration(max(0, int(ms)) // 1000)


def clamp_volume(value: float) -> float:
    return min(1.0, max(0.0, float(value)))
