from setuptools import setup, find_packages

setup(
    name="crun",
    description="Compile and run C/C++ files quickly",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    keywords=["c", "c++", "compiler", "runner"],
    python_requires=">=3.11",
    packages=find_packages(exclude=("tests", "tests.*")),
    install_requires=[
        "returns",
        "toml",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "crun = crun.main:main",
        ]
    },
    setup_requires=[
        "setuptools>=42",
        "setuptools_scm>=3.5",
    ],
    use_scm_version={"fallback_version": "0.1.0"},
)
