from pathlib import Path

import setuptools

this_directory = Path(__file__).parent
long_description = (this_directory / "README.rst").read_text()

test_dependencies = ["pytest"]


setuptools.setup(
    name="session-layout",
    version="1.0.0",
    description="Radial layout with local collision avoidance for live hierarchies of agent sessions.",
    long_description=long_description,
    long_description_content_type="text/x-rst",
    packages=["session_layout"],
    classifiers=[
        "Development Status :: 3 - Alpha",
        "License :: OSI Approved :: MIT License",
        "Operating System :: Unix",
        "Operating System :: MacOS",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
    keywords="layout radial graph collision agents sessions timeline",
    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.18",
        "pandas",
    ],
    test_suite="pytest",
    tests_require=test_dependencies,
    extras_require={"test": test_dependencies},
)
