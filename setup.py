import os, re
from setuptools import setup, find_packages

# Read the README file
with open("README.md") as f:
    dtomapper_readme = f.read()

def read_file(filepath: str) -> str:
    """Read and return the content of a file."""
    with open(filepath, "r", encoding="utf-8") as f:
        return f.read().strip()

def get_dependencies() -> list:
    """Retrieve dependencies from the requirements file."""
    depfile = "requirements.txt"
    if os.path.exists(depfile):
        return [
            line.strip() for line in read_file(depfile).splitlines() 
            if line.strip() and not line.startswith("#")
        ]
    return []

def get_version() -> str:
    """Retrieve the package version from the version components."""
    versionfile = os.path.join("dtomapper", "_version.py")

    if os.path.exists(versionfile):
        verstrline = read_file(versionfile)
        parts = []
        for component in ("MAJOR", "MINOR", "PATCH"):
            match = re.search(rf"^VERSION_{component} = (\d+)", verstrline, re.M)
            if not match:
                raise RuntimeError(f"Unable to find VERSION_{component} in '_version.py'.")
            parts.append(match.group(1))
        suffix = re.search(r"^VERSION_SUFFIX = ['\"]([^'\"]*)['\"]", verstrline, re.M)
        version = ".".join(parts)
        if suffix and suffix.group(1):
            version = f"{version}-{suffix.group(1)}"
        return version

    raise FileNotFoundError("Version file '_version.py' not found.")

extras_require = {
    # Development dependencies
    "dev": [
        "pytest>=7.4.0",
        "pytest-cov>=4.1.0",
        "pytest-xdist>=3.3.0",
        "hypothesis>=6.88.0",  # Property-based testing
        "black>=23.0.0",
        "flake8>=6.0.0",
        "pyright>=1.1.0",
        "pre-commit>=3.4.0",
    ],

    # Testing dependencies
    "test": [
        "pytest>=7.4.0",
        "pytest-cov>=4.1.0",
        "pytest-xdist>=3.3.0",
        "hypothesis>=6.88.0",
    ],
}

# Setup the package
if __name__ == '__main__':
    setup(
        name="dto-mapper",
        version=get_version(),
        description="Build typed objects from request data with pluggable casters.",
        long_description=dtomapper_readme,
        long_description_content_type="text/markdown",
        license="MIT",
        packages=find_packages(exclude=["tests", "tests.*"]),
        install_requires=get_dependencies(),
        extras_require=extras_require,
        python_requires=">=3.9",
        classifiers=[
            "Development Status :: 4 - Beta",
            "Intended Audience :: Developers",
            "License :: OSI Approved :: MIT License",
            "Operating System :: OS Independent",
            "Programming Language :: Python :: 3",
            "Programming Language :: Python :: 3.9",
            "Programming Language :: Python :: 3.10",
            "Programming Language :: Python :: 3.11",
            "Programming Language :: Python :: 3.12",
            "Topic :: Software Development :: Libraries :: Python Modules",
        ],
        keywords="dto mapping casting request pydantic",
        entry_points={
            "console_scripts": [
                "dtomapper=dtomapper.__main__:main",
            ],
        },
    )
