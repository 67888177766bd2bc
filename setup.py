from setuptools import setup, find_packages

setup(
    name="infragraph",
    version="0.1.0",
    packages=find_packages(include=["infragraph", "infragraph.*"]),
    install_requires=[
        "pulumi>=3.0.0",
        "pulumi-aws>=6.0.0",
        "pulumi-tls>=5.0.0",
        "requests>=2.28.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    python_requires=">=3.8",
    description="A declarative AWS web server stack resolved as a dependency graph and deployed with Pulumi",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
