from setuptools import find_packages, setup

setup(
    name="vendor-lookup",
    version="0.1.0",
    packages=find_packages(exclude=["vendor_lookup.tests"]),
    python_requires=">=3.10",
    install_requires=[
        "click",
        "httpx",
        "pandas",
        "python-dotenv"
    ],
    extras_require={"dev": ["pytest", "pytest-asyncio"]},
    entry_points={
        "console_scripts": ["vendor-lookup=vendor_lookup.cli.main:cli"],
    },
)
