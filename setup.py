from setuptools import setup, find_packages

setup(
    name="connectn",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "gymnasium",
        "wcwidth",  # terminal display width of piece symbols
    ],
    extras_require={
        "test": ["pytest"],
    },
)
