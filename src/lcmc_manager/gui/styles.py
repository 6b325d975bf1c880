"""Theme and style constants for the GUI.

This module defines the visual styling constants used throughout the application.
All GUI components should reference these constants to maintain consistent styling.

Constants:
    COLORS: Color palette for buttons, text, and UI elements
    FONTS: Font family, size, and weight configurations
    PADDING: Spacing values for margins and padding
    WINDOW_SIZES: Default and minimum window dimensions
    LOADER_COLORS: Badge colors per detected mod loader
"""

# Color palette - semantic color names for consistent theming
COLORS = {
    "primary": "#1f538d",        # Main action buttons (blue)
    "primary_hover": "#14375e",  # Primary button hover state
    "success": "#2d8a4e",        # Export/install actions (green)
    "success_hover": "#1e5c34",  # Success button hover state
    "danger": "#dc3545",         # Cancel/discard actions (red)
    "danger_hover": "#a71d2a",   # Danger button hover state
    "warning": "#ffc107",        # Warning indicators (yellow)
    "muted": "#6c757d",          # Disabled/secondary text (gray)
    "panel": ("#3d3d3d", "#1a1a1a"),  # Toolbar, status bar and side panes
}

LOADER_COLORS = {
    "Forge": "#d9822b",
    "Fabric": "#c6a36b",
    "Unknown": "#6c757d",
}

# Font configurations - tuple format: (family, size, weight)
FONTS = {
    "title": ("Segoe UI", 18, "bold"),
    "heading": ("Segoe UI", 14, "bold"),
    "body": ("Segoe UI", 12),
    "small": ("Segoe UI", 10),
}

# Padding and spacing values in pixels
PADDING = {
    "small": 10,
    "medium": 18,
    "large": 30,
}

# Window sizes - tuple format: (width, height)
WINDOW_SIZES = {
    "main": (900, 600),
    "min_main": (760, 480),
    "config_dialog": (700, 420),
    "import_dialog": (520, 560),
}
