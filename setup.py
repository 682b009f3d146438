from setuptools import setup, find_packages

setup(
    name="cbb-score-forecaster",
    version="0.1.0",
    description="Four-factor score prediction for NCAA men's basketball from Sports Reference data",
    author="Ben Rosen",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "numpy>=1.22.4",
        "pandas>=1.5.3",
        "scikit-learn>=1.3.0",
        "requests>=2.31.0",
        "beautifulsoup4>=4.12.0",
        "lxml>=4.9.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "cbb-forecaster=cbb_forecaster.main:main",
        ],
    },
)
