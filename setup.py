# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="gitscape",
    version="1.0.0",
    description="Interactive collapsible diagram of a repository file tree",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["gitscape*"]),
    package_data={"gitscape.interface": ["locales/*.json"]},
    include_package_data=True,
    python_requires=">=3.8",
    install_requires=[
        "customtkinter",  # GUI surface (main window, diagram view, dialogs)
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'gitscape=gitscape.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
