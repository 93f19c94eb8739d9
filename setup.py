from setuptools import setup, find_packages

setup(
    name="testdriver",
    version="1.0.0",
    description="Write WebDriver browser tests with a familiar unit-test style API",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=[
        "selenium>=4.11.0",
        "urllib3>=1.26",
        "webdriver-manager>=3.5.2",
        "pytest>=7.0",
        "pytest-xdist>=3.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        'console_scripts': [
            'testdriver=testdriver.__main__:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Topic :: Software Development :: Testing",
    ],
    python_requires=">=3.8",
)
