from setuptools import setup, find_packages

setup(
    name="btnu",
    version="0.1.0",
    description="btnu (back that NAS up) backs up groups of directories to onsite and offsite hosts with rsync over ssh.",
    author="CtrlAltMech",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=["pyyaml",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "btnu=btnu.main:main",
        ],
    },
    python_requires=">=3.9",
)
