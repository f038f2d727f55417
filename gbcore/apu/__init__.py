"""Audio processing unit: clocked units, the four channels and the mixer."""