# setup.py
from setuptools import setup, find_packages

setup(
    name="classdeps",
    version="1.0.0",
    description="Report the classes of a compiled class directory in reverse dependency order, grouping cycles",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'classdeps=classdeps.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
