# setup.py
from setuptools import setup, find_packages

setup(
    name="script_scout",
    version="0.1.0",
    description="Asynchronous crawler that extracts strings and secrets from a site's scripts",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"script_scout.report": ["templates/*.j2"]},
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "click>=8.1",
        "Jinja2>=3.1",
        "playwright>=1.40",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "script-scout=script_scout.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
