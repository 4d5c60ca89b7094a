#!/usr/bin/env python
from setuptools import setup, find_packages

pkg_root = 'src/python'

setup(name='blaunch',
      version='0.1.0',
      description='The blaunch project launches applications configured by typed options and lifecycle profiles.',
      author='Sebastian Thiel',
      author_email='byronimo@gmail.com',
      url='https://github.com/Byron/bcore',
      packages=find_packages(pkg_root),
      package_dir={'' : pkg_root},
      package_data={'blaunch.tests' : ["fixtures/*.yaml", "fixtures/*.ini"]},
      install_requires=['PyYAML'],
      extras_require={'test' : ['pytest']}
     )
