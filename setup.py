from setuptools import setup

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="scholarflow",
    version="1.0.0",
    description="ScholarFlow student fee tracker",
    long_description=long_description,
    long_description_content_type="text/markdown",
    py_modules=[
        'app',
        'backup',
        'config',
        'fee_status',
        'forms',
        'health',
        'insights',
        'ledger',
        'models',
        'security',
        'storage_service',
        'views',
        'wsgi',
    ],
    include_package_data=True,
    install_requires=[
        'Flask>=2.3.3',
        'Flask-SQLAlchemy>=3.0.5',
        'Flask-WTF>=1.2.1',
        'python-dotenv>=1.0.0',
        'SQLAlchemy>=2.0.43',
        'WTForms>=3.0.1',
        'Werkzeug>=2.3.7',
        'pydantic>=2.5',
        'python-dateutil>=2.8.2',
        'groq>=0.9.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.4',
        ],
    },
    python_requires='>=3.9',
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    entry_points={
        'console_scripts': [
            'scholarflow=wsgi:main',
        ],
    },
)
