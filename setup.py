import setuptools
import os

own_dir = os.path.abspath(os.path.dirname(__file__))


def requirements():
    with open(os.path.join(own_dir, 'requirements.txt')) as f:
        for line in f.readlines():
            line = line.strip()
            if not line or line.startswith('#'):
                continue

            yield line


def test_requirements():
    yield 'pytest'


def modules():
    module_names = [
        os.path.basename(os.path.splitext(module)[0]) for module in
        os.scandir(path=own_dir)
        if module.is_file() and module.name.endswith('.py')
    ]

    # not intended to be installed
    return [
        name for name in module_names
        if name not in ('setup', 'conftest')
    ]


def packages():
    return setuptools.find_packages(exclude=('test', 'test.*'))


def version():
    with open(os.path.join(own_dir, 'VERSION')) as f:
        return f.read().strip()


setuptools.setup(
    name='commit-range-reporter',
    version=version(),
    description='Commit-range reports between tags of GitHub and GitLab repositories',
    python_requires='>=3.11',
    py_modules=modules(),
    packages=packages(),
    package_data={
        '':['*.mako', 'VERSION'],
    },
    install_requires=list(requirements()),
    extras_require={
        'test': list(test_requirements()),
    },
    entry_points={
        'console_scripts': [
            'commit-range = commit_range.cli:main',
        ],
    },
)
