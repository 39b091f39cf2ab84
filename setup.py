import sys
from pathlib import Path

from setuptools import setup, find_packages

if sys.version_info[0:2] < (3, 10):
    raise RuntimeError("This package requires Python 3.10+.")

setup(
    name="eventq",
    use_scm_version={
        "version_scheme": "guess-next-dev",
        "local_scheme": "dirty-tag",
        "fallback_version": "0.1.0",
    },
    packages=find_packages(include=["eventq", "eventq.*"]),
    package_data={"eventq": ["_cfg.yaml"]},
    license="MIT",
    description="Decoder for circular event queue account snapshots",
    long_description=Path(__file__).with_name("README.rst").read_text(encoding="utf-8"),
    setup_requires=["setuptools_scm"],
    install_requires=["attrs>=22.2", "ruyaml>=0.91"],
    extras_require={"test": ["pytest"]},
    python_requires=">=3.10",
    classifiers=[
        "Programming Language :: Python :: 3",
        "Intended Audience :: Developers",
        "License :: OSI Approved",
    ],
)
