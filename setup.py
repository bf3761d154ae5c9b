from setuptools import setup, find_packages

setup(
    name="moviemaster_pro",
    version="0.1",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "fastapi",
        "uvicorn",
        "pydantic>=2",
        "pymongo>=4",
        "python-dotenv",
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx>=0.27.0",
        ],
    },
    python_requires='>=3.11',
)
