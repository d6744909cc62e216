"""安装脚本"""

from setuptools import find_packages, setup

setup(
    name="spade-docker",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=[
        "docker>=7.0.0",
        "typer>=0.9.0",
        "rich>=13.4.2",
        "click>=8.0.0",
        "loguru>=0.7.0",
        "platformdirs>=3.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "spade-docker=spade_docker.cli:main",
        ],
    },
    python_requires=">=3.8",
    description="构建Spade交叉编译Docker镜像并记录、清理已构建的镜像",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    keywords="docker, spade, zig, cross-compilation, image",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Build Tools",
        "Topic :: Utilities",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Operating System :: OS Independent",
    ],
)
