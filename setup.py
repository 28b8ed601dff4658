from glob import glob
from setuptools import setup


setup(
    name='genix',
    version='0.1.0',
    description='Scientific calculator, calendar and package installer shell',
    install_requires=[
        'regex',
        'prompt_toolkit',
    ],
    packages=['genix'],
    package_dir={'': 'src'},
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        "Programming Language :: Python :: 3",
    ],
    python_requires='>=3.6',
    extras_require={
        'test': [
            'pytest',
            'pytest-cov',
            'coverage',
            'flake8',
        ],
    },
    scripts=glob('bin/*'),
    license='ISC',
)
