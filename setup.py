# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="treefs",
    version="0.1.0",
    description="In-memory directory tree simulator with snapshot save/reload",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["treefs*"]),
    package_data={"treefs.interface": ["locales/*.json"]},
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'treefs=treefs.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
