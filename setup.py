from glob import glob
from setuptools import setup


setup(
    name='trigcalc',
    use_scm_version={
        'fallback_version': '0.1.0',
    },
    description='Expression calculator with trigonometric functions',
    install_requires=[
        'regex',
        'prompt_toolkit>=3.0.29',
    ],
    packages=['trigcalc'],
    package_dir={'': 'src'},
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        "Programming Language :: Python :: 3",
    ],
    setup_requires=[
        'setuptools_scm',
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-cov',
            'coverage',
            'flake8',
            'bandit',
            'mypy',
            'safety',
        ],
    },
    scripts=glob('bin/*'),
    license='ISC',
)
