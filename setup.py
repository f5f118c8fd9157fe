from setuptools import setup, find_packages

setup(
    name="trackrdf",
    version="0.1.0",
    description="Radial distribution functions from TRACK molecular dynamics trajectories",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "numpy",
        "matplotlib",
        "pyyaml",
        "tqdm",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'trackrdf=trackrdf.cli:main',
        ],
    },
    python_requires=">=3.8",
)
