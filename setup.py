from setuptools import setup, find_packages


setup(
    name="spindle",
    version="0.1.0",
    description="Unit quaternion rotation algebra for 3D geometry",
    packages=find_packages(include=["spindle", "spindle.*"]),
    python_requires=">=3.11",
    install_requires=[
        "numpy>=1.24",
        "pandas>=2.0",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
)
