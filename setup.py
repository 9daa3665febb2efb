from setuptools import setup, find_packages

setup(
    name="blipburst",
    version="0.1.0",
    packages=find_packages(where=".", include=["blipburst*"]),
    package_dir={"": "."},
    python_requires=">=3.11",
    install_requires=[
        "httpx>=0.25",
        "structlog>=23.1",
        "python-dotenv>=1.0",
        "rich>=13.0",
    ],
    extras_require={
        "dev": ["pytest>=7.4", "pytest-asyncio>=0.23"],
    },
)
