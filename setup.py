from setuptools import setup

setup(
    name="drmreader",
    version="0.1.0",
    packages=["drmreader"],
    entry_points={
        "console_scripts": ["drmreader=drmreader.__main__:run"],
    },
    install_requires=[],
    extras_require={
        "test": ["pytest", "pyyaml", "jsonschema"],
    },
    python_requires=">=3.9",
)
