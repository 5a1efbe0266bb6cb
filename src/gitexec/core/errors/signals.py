"""Signal helpers for reporting children that exited on a signal."""

import signal


def get_signal_name(sig_num: int) -> str:
    """Get human-readable signal name.

    Args:
        sig_num: The signal number (e.g., signal.SIGTERM)

    Returns:
        Human-readable signal name (e.g., "SIGTERM") or "signal N" if unknown
    """
    try:
        return signal.Signals(sig_num).name
    except ValueError:
        return f"signal {sig_num}"
