"""
Plot styling module for trackrdf.

This module provides predefined styles and color schemes for RDF plots.
"""
from typing import Dict, Any, Optional

# Default style parameters
DEFAULT_STYLE = {
    'figure.figsize': (8, 6),
    'figure.dpi': 100,
    'font.size': 12,
    'axes.labelsize': 14,
    'axes.titlesize': 16,
    'xtick.labelsize': 12,
    'ytick.labelsize': 12,
    'legend.fontsize': 12,
    'lines.linewidth': 2,
    'axes.grid': True,
    'grid.alpha': 0.3,
    'grid.linestyle': '--',
    'axes.spines.top': False,
    'axes.spines.right': False
}

# Color schemes
COLOR_SCHEMES = {
    'light': {
        'primary': '#1f77b4',  # Blue
        'text': '#000000',
        'background': '#ffffff',
        'grid': '#cccccc'
    },
    'dark': {
        'primary': '#4c72b0',  # Light blue
        'text': '#e0e0e0',
        'background': '#2d2d2d',
        'grid': '#404040'
    },
    'scientific': {
        'primary': '#000000',
        'text': '#000000',
        'background': '#ffffff',
        'grid': '#dddddd'
    }
}

def style_params(color_scheme: str = 'light', style: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Build matplotlib rcParams for a color scheme.

    Args:
        color_scheme: Name of the color scheme ('light', 'dark' or 'scientific')
        style: Extra rcParams overriding the defaults

    Returns:
        Dictionary usable with ``matplotlib.pyplot.rc_context``
    """
    if color_scheme not in COLOR_SCHEMES:
        raise ValueError(f"Unknown color scheme: {color_scheme}. Must be one of: {list(COLOR_SCHEMES.keys())}")
    colors = COLOR_SCHEMES[color_scheme]

    params = dict(DEFAULT_STYLE)
    params.update({
        'axes.facecolor': colors['background'],
        'figure.facecolor': colors['background'],
        'savefig.facecolor': colors['background'],
        'grid.color': colors['grid'],
        'axes.edgecolor': colors['text'],
        'axes.labelcolor': colors['text'],
        'xtick.color': colors['text'],
        'ytick.color': colors['text'],
        'text.color': colors['text']
    })
    if style:
        params.update(style)
    return params
