"""Setup configuration for the AWS Resource Adapters package."""
from setuptools import find_packages, setup

setup(
    name="aws-resource-adapters",
    version="0.1.0",
    description="Declarative CRUD resource adapters for AWS SES v2 tenants and Clean Rooms configured tables",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.9",
    install_requires=[
        "boto3>=1.40.0",
        "botocore>=1.40.0",
        "pydantic>=2.0",
        "structlog>=23.1.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "moto[sts]>=5.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "resource-adapters=aws_resource_adapters.cli.main:main",
        ],
    },
)
