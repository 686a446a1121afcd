# Copyright (C) 2025 Gil Benezer
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
Plotting Themes and Color Schemes

Color palettes and layout presets shared by the trajectory plots.

Main Classes
------------
ColorSchemes : Categorical palettes, one color per state coordinate
PlotThemes : Template, font and line presets applied to a finished figure

Usage
-----
>>> from chaossim.visualization.themes import ColorSchemes, PlotThemes
>>>
>>> colors = ColorSchemes.get_colors("colorblind_safe", n_colors=4)
>>> fig = PlotThemes.apply_theme(fig, theme="publication")
"""

from typing import Dict, List, Optional, Union

import plotly.graph_objects as go


class ColorSchemes:
    """
    Categorical color palettes.

    Attributes
    ----------
    PLOTLY : List[str]
        Default Plotly color sequence (10 colors)
    D3 : List[str]
        D3.js Category10 colors (10 colors)
    COLORBLIND_SAFE : List[str]
        Wong palette, colorblind accessible (8 colors)
    TABLEAU : List[str]
        Tableau 10 palette (10 colors)
    """

    PLOTLY = [
        "#636EFA",
        "#EF553B",
        "#00CC96",
        "#AB63FA",
        "#FFA15A",
        "#19D3F3",
        "#FF6692",
        "#B6E880",
        "#FF97FF",
        "#FECB52",
    ]

    D3 = [
        "#1f77b4",
        "#ff7f0e",
        "#2ca02c",
        "#d62728",
        "#9467bd",
        "#8c564b",
        "#e377c2",
        "#7f7f7f",
        "#bcbd22",
        "#17becf",
    ]

    COLORBLIND_SAFE = [
        "#0173B2",
        "#DE8F05",
        "#029E73",
        "#CC78BC",
        "#CA9161",
        "#949494",
        "#ECE133",
        "#56B4E9",
    ]

    TABLEAU = [
        "#4E79A7",
        "#F28E2B",
        "#E15759",
        "#76B7B2",
        "#59A14F",
        "#EDC948",
        "#B07AA1",
        "#FF9DA7",
        "#9C755F",
        "#BAB0AC",
    ]

    _ALIASES = {
        "plotly": "PLOTLY",
        "d3": "D3",
        "colorblind_safe": "COLORBLIND_SAFE",
        "wong": "COLORBLIND_SAFE",
        "tableau": "TABLEAU",
    }

    @classmethod
    def get_colors(cls, scheme: str = "plotly", n_colors: Optional[int] = None) -> List[str]:
        """
        Get a palette by name.

        Parameters
        ----------
        scheme : str
            'plotly', 'd3', 'colorblind_safe' (alias 'wong') or 'tableau'
        n_colors : Optional[int]
            Number of colors needed; the palette repeats when more colors
            are requested than it holds

        Returns
        -------
        List[str]
            Hex color codes

        Raises
        ------
        ValueError
            If the scheme name is not recognized

        Examples
        --------
        >>> len(ColorSchemes.get_colors("colorblind_safe", n_colors=10))
        10
        """
        key = scheme.lower().replace("-", "_").replace(" ", "_")
        if key not in cls._ALIASES:
            raise ValueError(
                f"Unknown color scheme '{scheme}'. Available: {', '.join(cls._ALIASES)}"
            )
        palette = getattr(cls, cls._ALIASES[key])

        if n_colors is None:
            return list(palette)
        return [palette[i % len(palette)] for i in range(n_colors)]


class PlotThemes:
    """
    Complete plotting theme configurations.

    Attributes
    ----------
    DEFAULT : dict
        Plotly white template
    PUBLICATION : dict
        Clean high-contrast styling with colorblind-safe colors
    DARK : dict
        Dark mode

    Examples
    --------
    >>> custom = dict(PlotThemes.DEFAULT, font_size=16)
    >>> fig = PlotThemes.apply_theme(fig, theme=custom)
    """

    DEFAULT = {
        "color_scheme": "plotly",
        "template": "plotly_white",
        "font_family": "Arial, sans-serif",
        "font_size": 12,
        "line_width": 1.5,
    }

    PUBLICATION = {
        "color_scheme": "colorblind_safe",
        "template": "simple_white",
        "font_family": "Times New Roman, serif",
        "font_size": 14,
        "line_width": 2,
        "showlegend": True,
    }

    DARK = {
        "color_scheme": "plotly",
        "template": "plotly_dark",
        "font_family": "Arial, sans-serif",
        "font_size": 12,
        "line_width": 1.5,
    }

    @classmethod
    def get_theme(cls, theme: Union[str, Dict]) -> Dict:
        """Resolve a theme name or pass a custom theme dict through."""
        if isinstance(theme, dict):
            return theme
        if not isinstance(theme, str):
            raise TypeError(f"theme must be str or dict, got {type(theme).__name__}")

        themes = {"default": cls.DEFAULT, "publication": cls.PUBLICATION, "dark": cls.DARK}
        try:
            return themes[theme.lower()]
        except KeyError:
            raise ValueError(
                f"Unknown theme '{theme}'. Available: {', '.join(themes)}"
            ) from None

    @classmethod
    def apply_theme(cls, fig: go.Figure, theme: Union[str, Dict] = "default") -> go.Figure:
        """
        Apply a theme to a Plotly figure in place and return it.

        Parameters
        ----------
        fig : go.Figure
            Figure to style
        theme : str or dict
            Theme name ('default', 'publication', 'dark') or a custom dict
            using the same keys

        Returns
        -------
        go.Figure
            The styled figure
        """
        config = cls.get_theme(theme)

        if "template" in config:
            fig.update_layout(template=config["template"])

        font = {}
        if "font_family" in config:
            font["family"] = config["font_family"]
        if "font_size" in config:
            font["size"] = config["font_size"]
        if font:
            fig.update_layout(font=font)

        if "showlegend" in config:
            fig.update_layout(showlegend=config["showlegend"])

        if "line_width" in config:
            for trace in fig.data:
                if hasattr(trace, "line"):
                    trace.line.width = config["line_width"]

        return fig


__all__ = ["ColorSchemes", "PlotThemes"]
