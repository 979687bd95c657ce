from setuptools import setup, find_packages

setup(
    name="ipay_africa_payments",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        'flask',
        'python-dotenv',
        'werkzeug',
        'requests'
    ],
    extras_require={
        'test': [
            'pytest'
        ]
    },
)
