from setuptools import setup, find_packages

setup(
    name="cvrdt",
    version="0.1.0",
    description="State-based convergent replicated data types (CvRDTs) with law checking",
    author="adamfilli",
    packages=find_packages(include=["cvrdt", "cvrdt.*"]),
    install_requires=[],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    include_package_data=True,
    python_requires=">=3.11",
)
