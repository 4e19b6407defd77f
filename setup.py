"""setuptools configuration for FocusClock.

Install for development:
    pip install -e .[test]
"""

from setuptools import setup, find_packages

setup(
    name="FocusClock",
    version="0.1.0",
    description="Work/break countdown timer built on PyQt6",
    packages=find_packages(include=["focusclock", "focusclock.*"]),
    python_requires=">=3.10",
    install_requires=["PyQt6>=6.4"],
    extras_require={"test": ["pytest>=7"]},
    entry_points={
        "gui_scripts": ["focusclock = focusclock.__main__:main"],
    },
)
