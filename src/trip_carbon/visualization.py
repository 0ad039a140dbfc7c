import matplotlib.pyplot as plt
import os
from datetime import datetime
from typing import List, Optional
from .models import ModeComparison
from .utils.formatting import mode_info
import logging

logger = logging.getLogger(__name__)

# Charts are written under <project root>/reports unless an output root is given
current_directory = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
report_directory = os.path.join(current_directory, 'reports')


class Visualizer:
    def __init__(self, output_root: Optional[str] = None):
        self.output_root = output_root or report_directory
        self._setup_style()
        self.session_dir = self._create_session_dir()

    def _setup_style(self):
        """Configure matplotlib for clean, report-ready plots."""
        plt.rcParams.update(plt.rcParamsDefault)

        plt.rcParams.update({
            'font.family': 'sans-serif',
            'font.sans-serif': ['Arial', 'Helvetica', 'Calibri', 'DejaVu Sans'],
            'font.size': 12,
            'axes.titlesize': 16,
            'axes.titleweight': 'bold',
            'axes.labelsize': 13,
            'text.color': '#2C3E50',
            'axes.labelcolor': '#2C3E50',
            'xtick.color': '#2C3E50',
            'ytick.color': '#2C3E50'
        })

        plt.rcParams.update({
            'axes.spines.top': False,
            'axes.spines.right': False,
            'axes.linewidth': 1.2,
            'grid.color': '#E0E0E0',
            'grid.linestyle': ':',
            'axes.grid': True,
            'axes.grid.axis': 'x',
            'axes.axisbelow': True
        })

        self.colors = {
            'neutral': '#5D6D7E',
            'text': '#2C3E50',
        }

    def _create_session_dir(self) -> str:
        """Create the directory for this session's plots."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        path = os.path.join(self.output_root, timestamp)
        os.makedirs(path, exist_ok=True)
        return path

    def get_save_path(self, filename: str) -> str:
        return os.path.join(self.session_dir, filename)

    def plot_mode_comparison(
        self,
        comparison: List[ModeComparison],
        selected_mode: Optional[str] = None,
        title: str = ""
    ) -> Optional[str]:
        """Horizontal bars of emission per mode; the selected mode keeps its colour, others are greyed."""
        if not comparison:
            return None

        labels = []
        colors = []
        for row in comparison:
            info = mode_info(row.mode)
            labels.append(info.label)
            if selected_mode is None or row.mode == selected_mode:
                colors.append(info.color)
            else:
                colors.append(self.colors['neutral'])
        emissions = [row.emission for row in comparison]

        fig, ax = plt.subplots(figsize=(10, 1.2 + 0.8 * len(comparison)), dpi=150)
        bars = ax.barh(labels, emissions, color=colors, alpha=0.85, height=0.6)
        ax.invert_yaxis()  # lowest emission on top

        ax.set_xlabel("Emission (kgCO2)", fontweight='bold')
        ax.set_title(f"Emissions by Transport Mode\n{title}".rstrip(), pad=20, loc='left')

        top = max(emissions) if max(emissions) > 0 else 1.0
        ax.set_xlim(0, top * 1.25)
        for bar, row in zip(bars, comparison):
            ax.text(bar.get_width() + top * 0.01, bar.get_y() + bar.get_height() / 2,
                    f"{row.emission:.2f} kg ({row.percentage_vs_car:.0f}%)",
                    va='center', fontsize=10, color=self.colors['text'])

        plt.tight_layout()
        filepath = self.get_save_path("mode_comparison.png")
        plt.savefig(filepath, dpi=150, bbox_inches='tight')
        plt.close(fig)
        logger.info(f"   [Plot] Saved comparison to: {filepath}")
        return filepath
