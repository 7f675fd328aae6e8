from setuptools import setup, find_packages


setup(name="footfall",
      version='0.3',
      description='Page-view tracking and visit metrics',
      long_description='',
      classifiers=[
          'Development Status :: 4 - Beta',
          'Programming Language :: Python :: 3',
          'Topic :: Internet :: WWW/HTTP :: Site Management',
      ],
      keywords='analytics tracking metrics',
      url='http://github.com/cartlogic/footfall',
      author='Scott Torborg',
      author_email='scott@cartlogic.com',
      install_requires=[
          'sqlalchemy>=1.4',
          'pytz',
      ],
      extras_require=dict(
          test=['pytest'],
      ),
      license='MIT',
      packages=find_packages(),
      entry_points=dict(
          console_scripts=[
              'footfall-report=footfall.report:main',
          ]
      ),
      zip_safe=False)
