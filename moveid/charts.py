"""
Chart images embedded in the PDF report.
"""
from io import BytesIO

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np


BAR_COLOR = '#0066CC'
BACKGROUND_COLOR = '#F8F9FA'


def _label(joint):
    return joint.replace('_', ' ').title()


def create_joint_angle_chart(joint_angles, figsize=(6, 4)):
    """
    Create a bar chart of joint angles in degrees.

    Bar heights are scaled to the largest angle, with the value printed
    above each bar.

    Parameters
    ----------
    joint_angles : dict
        Joint name to angle in degrees.
    figsize : tuple
        Figure size in inches.

    Returns
    -------
    BytesIO
        PNG image, rewound to the start.
    """
    labels = [_label(joint) for joint in joint_angles]
    values = np.array(list(joint_angles.values()), dtype=float)

    fig, ax = plt.subplots(figsize=figsize)
    try:
        fig.patch.set_facecolor(BACKGROUND_COLOR)
        ax.set_facecolor(BACKGROUND_COLOR)

        positions = np.arange(len(values))
        bars = ax.bar(positions, values, color=BAR_COLOR, width=0.7)

        for bar, value in zip(bars, values):
            ax.text(bar.get_x() + bar.get_width() / 2, bar.get_height(),
                    f"{value:g}°", ha='center', va='bottom', fontsize=8)

        top = values.max() if len(values) else 1.0
        bottom = min(values.min(), 0.0) if len(values) else 0.0
        ax.set_ylim(bottom * 1.15, max(top, 1.0) * 1.15)
        ax.set_xticks(positions)
        ax.set_xticklabels(labels, rotation=30, ha='right', fontsize=8)
        ax.set_ylabel('Angle (°)', fontsize=10)
        ax.set_title('Joint Angles (degrees)', fontsize=12, fontweight='bold')
        ax.grid(True, axis='y', alpha=0.3)

        fig.tight_layout()

        img_buffer = BytesIO()
        fig.savefig(img_buffer, format='png', dpi=150, bbox_inches='tight',
                    facecolor=fig.get_facecolor(), edgecolor='none')
    finally:
        plt.close(fig)
    img_buffer.seek(0)

    return img_buffer
