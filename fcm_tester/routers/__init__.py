from fcm_tester.routers import firebase, ui
