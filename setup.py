from setuptools import find_packages, setup

setup(
    name="fem-diffusion",
    version="0.1.0",
    description="Element-level matrices for neutron diffusion finite elements",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.23",
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
)
