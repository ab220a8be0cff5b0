
from setuptools import setup, find_packages

setup(
    name="linkedin_publisher",
    version="1.0.0",
    packages=find_packages(include=["linkedin_publisher", "linkedin_publisher.*"]),
    install_requires=[
        "aiohttp>=3.8.1,<3.14",
        "cryptography>=3.4.7",
        "fastapi>=0.100.0",
        "pydantic>=2.0",
        "pydantic-settings>=2.0",
        "python-dotenv>=0.19.0",
        "python-multipart>=0.0.6",
        "uvicorn>=0.15.0",
    ],
    extras_require={
        "test": [
            "aioresponses>=0.7.6",
            "httpx>=0.24.0",
            "pytest>=7.0",
            "pytest-asyncio>=0.21.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "linkedin-publisher=linkedin_publisher.main:run",
        ],
    },
    python_requires=">=3.8",
    description="Sign in with LinkedIn and publish posts on administered organization pages",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
