from setuptools import setup, find_packages

setup(
    name="bullseye-keypoints",
    version="1.0.0",
    description="Concentric-ring fiducial marker detection at pixel and sub-pixel precision",
    author="NovaVista",
    packages=find_packages(include=["bullseye", "bullseye.*"]),
    install_requires=[
        "opencv-python>=4.8.0",
        "numpy>=1.24.0",
        "scipy>=1.10.0",
        "scikit-image>=0.21.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.9",
)
