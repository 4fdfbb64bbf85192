from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="nym-exporter",
    version="1.0.0",
    description="Prometheus exporter for Nym explorer node and account metrics",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="Nym Exporter Team",
    packages=find_packages(exclude=["examples"]),
    install_requires=[
        "requests>=2.25.0",
        "click>=8.0.0",
        "pydantic>=2.0",
        "fastapi>=0.100.0",
        "uvicorn>=0.15.0",
    ],
    extras_require={
        "dev": [
            "pytest>=6.0.0",
            "pytest-cov>=2.0.0",
            "httpx>=0.24.0",
            "black>=21.0.0",
            "flake8>=3.8.0",
            "mypy>=0.800"
        ]
    },
    entry_points={
        'console_scripts': [
            'nym-exporter=nym_exporter.cli:cli',
        ],
    },
    python_requires=">=3.9",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: System :: Monitoring",
        "Topic :: System :: Networking :: Monitoring",
    ],
)
