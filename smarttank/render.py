"""
Display values for the dashboard, computed from TankState
"""
from datetime import datetime

LEVEL_PLACEHOLDER = 'Fetching...'


def render(state, now=None):
    """Build the view model the template and the JSON API both use"""
    now = now or datetime.now()
    manual = not state.is_auto

    if state.level_percent is not None:
        level = state.level_percent
        level_text = f"{level:g}%"
        progress_width = f"{level:g}%"
        fill_transform = f"translateY({100 - level:g}%)"
    else:
        level_text = LEVEL_PLACEHOLDER
        progress_width = '0%'
        fill_transform = 'translateY(100%)'

    return {
        'level_percent': state.level_percent,
        'level_text': level_text,
        'progress_width': progress_width,
        'fill_transform': fill_transform,
        'motor_on': state.motor_on,
        'motor_badge': 'ON' if state.motor_on else 'OFF',
        'motor_badge_class': f"badge {'badge--on' if state.motor_on else 'badge--off'}",
        'is_auto': state.is_auto,
        'mode_text': 'AUTO' if state.is_auto else 'MANUAL',
        'motor_toggle_enabled': manual,
        'motor_toggle_highlight': state.motor_on and manual,
        'motor_icon': '⏹' if state.motor_on else '▶',
        'motor_toggle_text': 'Stop Motor' if state.motor_on else 'Start Motor',
        'min_level': state.min_level,
        'max_level': state.max_level,
        'min_output': f"{state.min_level:g}%",
        'max_output': f"{state.max_level:g}%",
        'theme': state.theme,
        'theme_icon': '🌙' if state.theme == 'light' else '🌓',
        'year': now.year,
    }
