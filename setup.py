from setuptools import setup

setup(
    name='encrypted-id-obfuscation',
    version='1.0',
    description='Reversible AES/HMAC obfuscation of 64-bit IDs into URL-safe tokens.',
    python_requires='>=3.10',
    py_modules=[
        'app',
        'cipher',
        'config',
        'core_logic',
        'encoding',
        'errors',
        'keys',
        'limiter',
        'models',
        'obfuscation',
        'payload',
        'router',
    ],
    install_requires=[
        'fastapi',
        'uvicorn',
        'pydantic',
        'slowapi',
        'cryptography',
        'python-dotenv',
    ],
    extras_require={
        'test': ['pytest', 'httpx', 'limits'],
    },
    entry_points={
        'console_scripts': ['obfuscation-service=app:main'],
    },
)
