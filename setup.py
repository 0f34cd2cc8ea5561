from setuptools import find_packages, setup


setup(
    name="flux-actions",
    version="0.1.0",
    description="Flux-style actions: composable publishers with hook-driven, next-turn emission.",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.8",
    install_requires=[
        "pydantic>=2.6",
        "pydantic-settings>=2.2",
        "structlog>=24.1",
        "rich>=13.7",
        "typer>=0.12",
    ],
    extras_require={
        "dev": ["pytest>=8.0", "pytest-asyncio>=0.23", "ruff>=0.6", "mypy>=1.8"],
    },
    entry_points={"console_scripts": ["flux-actions=flux_actions.cli:app"]},
)
