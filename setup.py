""" ecsig build script for setuptools.

"""

from setuptools import find_packages, setup  # type: ignore

import ecsig

with open("README.md", "r", encoding="ascii") as file_:
    longdescription = file_.read()

setup(
    name=ecsig.name,
    version=ecsig.__version__,
    license=ecsig.__license__,
    author=ecsig.__author__,
    author_email=ecsig.__author_email__,
    description="Elliptic curve arithmetic and ECDSA from first principles",
    long_description=longdescription,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"ecsig": ["data/*.json"]},
    include_package_data=True,
    install_requires=["dataclasses_json"],
    extras_require={"test": ["pytest", "coincurve"]},
    keywords="cryptography elliptic-curves secp256k1 ecdsa modular-arithmetic",
    python_requires=">=3.8",
    classifiers=[
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Topic :: Security :: Cryptography",
        "Topic :: Scientific/Engineering",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
)
