from setuptools import setup, find_packages

setup(
    name="golfbets",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    package_data={"golfbets": ["py.typed"]},
    python_requires=">=3.10",
    install_requires=[
        'PyYAML>=6.0',
        'tabulate>=0.9.0',
        'typing_extensions>=4.5.0'
    ],
    extras_require={
        'test': [
            'pytest>=7.0.0'
        ]
    },
    entry_points={
        'console_scripts': [
            'golfbets=golfbets.cli:main'
        ]
    }
)
