"""Shared pytest fixtures."""

import json
from pathlib import Path

import pytest

from native_migrator.utils.logging import reset_logger


@pytest.fixture(autouse=True)
def _reset_logger():
    """Give every test a fresh logger bound to the current stdout."""
    reset_logger()
    yield
    reset_logger()


VARIABLES_GRADLE = """ext {
    minSdkVersion = 22
    compileSdkVersion = 34
    targetSdkVersion = 34
    androidxActivityVersion =  '1.8.0'
    androidxAppCompatVersion = '1.7.0'
    androidxCoreVersion = '1.16.0'
    firebaseMessagingVersion = '23.3.1'
}
"""

BUILD_GRADLE = """buildscript {
    repositories {
        google()
        mavenCentral()
    }
    dependencies {
        classpath 'com.android.tools.build:gradle:8.2.1'
        classpath 'com.google.gms:google-services:4.4.0'
    }
}

apply from: "variables.gradle"
"""

MANIFEST = """<?xml version="1.0" encoding="utf-8"?>
<manifest xmlns:android="http://schemas.android.com/apk/res/android">
    <application android:label="@string/app_name">
        <activity
            android:configChanges="orientation|keyboardHidden|keyboard|screenSize|locale|smallestScreenSize|screenLayout|uiMode"
            android:name=".MainActivity">
        </activity>
    </application>
</manifest>
"""

WRAPPER_PROPERTIES = """distributionBase=GRADLE_USER_HOME
distributionPath=wrapper/dists
distributionUrl=https\\://services.gradle.org/distributions/gradle-8.2.1-all.zip
zipStoreBase=GRADLE_USER_HOME
"""

PBXPROJ = """/* Begin XCBuildConfiguration section */
		504EC3141FED79650016851F /* Debug */ = {
			buildSettings = {
				IPHONEOS_DEPLOYMENT_TARGET = 13.0;
			};
		};
		504EC3151FED79650016851F /* Release */ = {
			buildSettings = {
				IPHONEOS_DEPLOYMENT_TARGET = 13.0;
			};
		};
"""

PODFILE = """require_relative '../../node_modules/@capacitor/ios/scripts/pods_helpers'

platform :ios, '13.0'
use_frameworks!
"""


@pytest.fixture
def project_dir(tmp_path) -> Path:
    """Create a version 6 project with ios and android platforms."""
    package_json = {
        'name': 'demo-app',
        'dependencies': {
            '@capacitor/core': '^6.1.0',
            '@capacitor/ios': '^6.1.0',
            '@capacitor/android': '^6.1.0',
            '@capacitor/app': '^6.0.0',
            'left-pad': '^1.3.0',
        },
        'devDependencies': {
            '@capacitor/cli': '^6.1.0',
        },
    }
    (tmp_path / 'package.json').write_text(json.dumps(package_json, indent=2), encoding='utf-8')

    ios_project = tmp_path / 'ios' / 'App'
    (ios_project / 'App.xcodeproj').mkdir(parents=True)
    (ios_project / 'App.xcodeproj' / 'project.pbxproj').write_text(PBXPROJ, encoding='utf-8')
    (ios_project / 'Podfile').write_text(PODFILE, encoding='utf-8')

    android = tmp_path / 'android'
    (android / 'gradle' / 'wrapper').mkdir(parents=True)
    (android / 'gradle' / 'wrapper' / 'gradle-wrapper.properties').write_text(WRAPPER_PROPERTIES, encoding='utf-8')
    (android / 'build.gradle').write_text(BUILD_GRADLE, encoding='utf-8')
    (android / 'variables.gradle').write_text(VARIABLES_GRADLE, encoding='utf-8')
    main_dir = android / 'app' / 'src' / 'main'
    main_dir.mkdir(parents=True)
    (main_dir / 'AndroidManifest.xml').write_text(MANIFEST, encoding='utf-8')

    return tmp_path
