# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="duvis",
    version="1.0.0",
    description="Rebuild and visualize the directory tree encoded in du output",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["duvis", "duvis.*"]),
    python_requires=">=3.9",
    install_requires=[
        "customtkinter",  # Nested-rectangle viewer (duvis -g)
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'duvis=duvis.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
