"""Chart rendering tests."""
import matplotlib.pyplot as plt
import pytest

from moveid.charts import create_joint_angle_chart


class TestJointAngleChart:
    def test_png_output(self):
        image = create_joint_angle_chart({'right_knee': 95.0, 'trunk': 30.5})
        assert image.read(8) == b'\x89PNG\r\n\x1a\n'

    def test_figure_closed(self):
        before = plt.get_fignums()
        create_joint_angle_chart({'knee': 90.0})
        assert plt.get_fignums() == before

    def test_figure_closed_when_drawing_fails(self):
        before = plt.get_fignums()
        with pytest.raises(ValueError):
            create_joint_angle_chart({'knee': float('nan')})
        assert plt.get_fignums() == before
