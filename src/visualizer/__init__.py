"""
Pygame viewer for Unblock solutions.
"""

from .interactive_visualizer import SolutionVisualizer, VisualizationMode

__all__ = ["SolutionVisualizer", "VisualizationMode"]
