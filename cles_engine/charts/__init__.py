from .distributions import CHARTS, figure_to_png, plot_overlap, plot_superiority

__all__ = ["CHARTS", "figure_to_png", "plot_overlap", "plot_superiority"]
