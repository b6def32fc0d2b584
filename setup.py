from setuptools import setup
setup(name = 'pnm',
      version = '0.1',
      description = 'Pure Python PNM and PAM codec.',
      author = 'Johann C. Rocholl',
      author_email = 'johann@browsershots.org',
      package_dir = {'': 'lib'},
      py_modules = ['pnm'],
      python_requires = '>=3.6',
      extras_require = {'test': ['pytest', 'pytest-timeout']},
      )
