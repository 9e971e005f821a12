# setup.py
from setuptools import find_namespace_packages, setup

setup(
    name="codecraft-vfs",
    version="1.0.0",
    description="Virtual file system engine for the CodeCraft browser project editor",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["codecraft_vfs*"]),
    python_requires=">=3.9",
    install_requires=[
        "requests",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'codecraft-vfs=codecraft_vfs.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
