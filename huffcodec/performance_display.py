import matplotlib.pyplot as plt
import numpy as np

from .logger import CodeAssignmentLog, SegmentLog

class PerformanceDisplay:
    def __init__(self, logs,
                 fig_size=(10, 6), dpi=100, font_size=12,
                 dot_size=20, dot_alpha=0.6,
                 dot_color='blue',
                 trend_line_color='red', trend_line_linewidth=2,
                 moving_avg_window=5):
        self.logs = logs
        self.fig_size = fig_size
        self.dpi = dpi
        self.font_size = font_size
        self.dot_size = dot_size
        self.dot_alpha = dot_alpha
        self.dot_color = dot_color
        self.trend_line_color = trend_line_color
        self.trend_line_linewidth = trend_line_linewidth
        self.moving_avg_window = moving_avg_window

    def _moving_average(self, data):
        if self.moving_avg_window < 1:
            raise ValueError("moving_avg_window must be at least 1")
        # mode='same' returns max(len(data), window) points
        window = min(self.moving_avg_window, len(data))
        return np.convolve(data, np.ones(window) / window, mode='same')

    def _plot_graph(self, x_values, y_values, title, xlabel, ylabel, show_graph=False, save_path=None):
        if not y_values:
            print(f"No data available for {title}.")
            return False

        # The trend line needs x in ascending order.
        order = np.argsort(x_values, kind='stable')
        x = np.asarray(x_values, dtype=float)[order]
        y = np.asarray(y_values, dtype=float)[order]
        trend = self._moving_average(y)

        fig = plt.figure(figsize=self.fig_size, dpi=self.dpi)

        plt.scatter(x, y, s=self.dot_size, alpha=self.dot_alpha, color=self.dot_color, label="Data points")
        plt.plot(x, trend, color=self.trend_line_color, linewidth=self.trend_line_linewidth, label="Moving Average Trend")

        plt.title(title, fontsize=self.font_size + 2)
        plt.xlabel(xlabel, fontsize=self.font_size)
        plt.ylabel(ylabel, fontsize=self.font_size)
        plt.grid(True)
        plt.legend(fontsize=self.font_size)
        plt.tight_layout()

        if save_path:
            plt.savefig(save_path)
        if show_graph:
            plt.show()
        plt.close(fig)
        return True

    def generate_code_length_plot(self, show_graphs=False, save_path=None):
        logs = [log for log in self.logs if isinstance(log, CodeAssignmentLog)]
        frequencies = [log.frequency for log in logs]
        lengths = [log.code_length for log in logs]
        return self._plot_graph(frequencies, lengths, "Code Length by Symbol Frequency", "Frequency", "Code length (bits)", show_graphs, save_path)

    def generate_segment_padding_plot(self, show_graphs=False, save_path=None):
        logs = [log for log in self.logs if isinstance(log, SegmentLog)]
        positions = list(range(1, len(logs) + 1))
        paddings = [log.padding for log in logs]
        return self._plot_graph(positions, paddings, "Segment Padding", "Segment Order", "Padding (bits)", show_graphs, save_path)
