"""Default migration targets.

Values describe the version 6 -> 7 upgrade and can all be overridden
from .native-migrator.yml.
"""

CONFIG_FILE_NAME = '.native-migrator.yml'
BACKUP_PREFIX = 'native_migrator_backup_'

CORE_PACKAGE = '@capacitor/core'
IOS_PACKAGE = '@capacitor/ios'
ANDROID_PACKAGE = '@capacitor/android'

MINIMUM_MAJOR = 6
CORE_VERSION = '^7.0.0'
PLUGIN_VERSION = '^7.0.0'
GRADLE_VERSION = '8.11.1'
IOS_DEPLOYMENT_TARGET = '14.0'
MINIMUM_JDK = 21

PACKAGE_MANAGERS = ['npm', 'yarn', 'pnpm', 'bun']

CORE_LIBS = [
    '@capacitor/core',
    '@capacitor/cli',
    '@capacitor/ios',
    '@capacitor/android',
]

OFFICIAL_PLUGINS = [
    '@capacitor/action-sheet',
    '@capacitor/app',
    '@capacitor/app-launcher',
    '@capacitor/browser',
    '@capacitor/camera',
    '@capacitor/clipboard',
    '@capacitor/device',
    '@capacitor/dialog',
    '@capacitor/filesystem',
    '@capacitor/geolocation',
    '@capacitor/haptics',
    '@capacitor/keyboard',
    '@capacitor/local-notifications',
    '@capacitor/motion',
    '@capacitor/network',
    '@capacitor/preferences',
    '@capacitor/push-notifications',
    '@capacitor/screen-reader',
    '@capacitor/screen-orientation',
    '@capacitor/share',
    '@capacitor/splash-screen',
    '@capacitor/status-bar',
    '@capacitor/text-zoom',
    '@capacitor/toast',
]

# Plugins with breaking API changes in this major
BREAKING_PLUGINS = [
    '@capacitor/app',
    '@capacitor/device',
    '@capacitor/haptics',
    '@capacitor/splash-screen',
    '@capacitor/statusbar',
]

BREAKING_CHANGES_URL = 'https://capacitorjs.com/docs/next/updating/7-0#plugins'

# android/variables.gradle of the new platform template
TEMPLATE_VARIABLES = {
    'minSdkVersion': 23,
    'compileSdkVersion': 35,
    'targetSdkVersion': 35,
    'androidxActivityVersion': '1.9.2',
    'androidxAppCompatVersion': '1.7.0',
    'androidxCoordinatorLayoutVersion': '1.2.0',
    'androidxCoreVersion': '1.15.0',
    'androidxFragmentVersion': '1.8.4',
    'coreSplashScreenVersion': '1.0.1',
    'androidxWebkitVersion': '1.12.1',
    'junitVersion': '4.13.2',
    'androidxJunitVersion': '1.2.1',
    'androidxEspressoCoreVersion': '3.6.1',
    'cordovaAndroidVersion': '10.1.1',
}

# classpath versions from android/build.gradle of the new platform template
TEMPLATE_CLASSPATHS = {
    'com.android.tools.build:gradle': '8.7.2',
    'com.google.gms:google-services': '4.4.2',
}

# Variables used by official plugins, replaced only when already declared
PLUGIN_VARIABLES = {
    'firebaseMessagingVersion': '24.1.0',
    'playServicesLocationVersion': '21.3.0',
    'androidxBrowserVersion': '1.8.0',
    'androidxMaterialVersion': '1.12.0',
    'androidxExifInterfaceVersion': '1.3.7',
    'androidxCoreKTXVersion': '1.12.0',
    'googleMapsPlayServicesVersion': '18.2.0',
    'googleMapsUtilsVersion': '3.8.2',
    'googleMapsKtxVersion': '5.0.0',
    'googleMapsUtilsKtxVersion': '5.0.0',
    'kotlinxCoroutinesVersion': '1.7.3',
    'coreSplashScreenVersion': '1.0.1',
}

OLD_CONFIG_CHANGES = (
    'android:configChanges="orientation|keyboardHidden|keyboard|screenSize'
    '|locale|smallestScreenSize|screenLayout|uiMode"'
)
NEW_CONFIG_CHANGES = (
    'android:configChanges="orientation|keyboardHidden|keyboard|screenSize'
    '|locale|smallestScreenSize|screenLayout|uiMode|navigation"'
)
