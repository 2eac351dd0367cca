# setup.py
from setuptools import setup, find_packages

setup(
    name="agent-ready",
    version="0.1.0",
    description="Асинхронный краулер AgentReady: HTML-страницы сайта для извлечения контента",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"agent_ready": ["templates/*.j2"]},
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "lxml>=5.0",
        "pydantic>=2.5",
        "PyYAML>=6.0",
        "click>=8.1",
        "Jinja2>=3.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "agent-ready=agent_ready.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
