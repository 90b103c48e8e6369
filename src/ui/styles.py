"""
Dark mode stylesheet for the timer bar.
Catppuccin Mocha-inspired palette.
"""

DARK_STYLESHEET = """
/* ── Base ────────────────────────────────────────────────────────── */
QWidget {
    background-color: #1e1e2e;
    color: #cdd6f4;
    font-family: "Segoe UI", "Inter", sans-serif;
    font-size: 13px;
}

QMainWindow {
    background-color: #1e1e2e;
}

/* ── Buttons ─────────────────────────────────────────────────────── */
QPushButton {
    background-color: #313244;
    color: #cdd6f4;
    border: 1px solid #585b70;
    border-radius: 8px;
    padding: 6px 14px;
    font-weight: 600;
    min-height: 22px;
}

QPushButton:hover {
    background-color: #45475a;
    border-color: #89b4fa;
}

QPushButton:pressed {
    background-color: #585b70;
}

QPushButton#primary {
    background-color: #89b4fa;
    color: #1e1e2e;
    border: none;
}

QPushButton#danger {
    background-color: #f38ba8;
    color: #1e1e2e;
    border: none;
}

/* paused: the Resume button takes the warning colour */
QPushButton#warning {
    background-color: #fab387;
    color: #1e1e2e;
    border: none;
}

/* ── Labels ──────────────────────────────────────────────────────── */
QLabel#timer {
    font-size: 28px;
    font-weight: 700;
    font-family: "Consolas", "Courier New", monospace;
    color: #f9e2af;
}

QLabel#state_label {
    font-size: 14px;
    font-weight: 600;
    color: #cba6f7;
}

QStatusBar {
    color: #a6adc8;
}
"""
